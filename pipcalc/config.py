"""PipCalc — application configuration.

Loads .env variables into a typed config object.
Validates values on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from pipcalc.calc.models import Direction
from pipcalc.calc.validation import parse_positive

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    default_pair: str
    default_direction: Direction
    default_risk_pct: str  # form strings, shown as typed
    default_rr_ratio: str
    spread_pips: float
    log_level: str
    api_port: int

    def form_defaults(self) -> dict[str, str]:
        """Initial raw form values for a new calculator session."""
        return {
            "direction": self.default_direction.value,
            "currency_pair": self.default_pair,
            "entry_price": "",
            "account_size": "",
            "risk_percentage": self.default_risk_pct,
            "risk_reward_ratio": self.default_rr_ratio,
            "stop_loss_pips": "",
        }


def _positive_str(name: str, default: str) -> str:
    raw = os.environ.get(name, default)
    if parse_positive(raw) is None:
        raise ValueError(f"{name} must be a positive number, got '{raw}'")
    return raw.strip()


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Every variable is optional.  Raises ``ValueError`` with a message naming
    the variable when a value is present but invalid.
    """
    load_dotenv(dotenv_path=env_path)

    raw_direction = os.environ.get("DEFAULT_DIRECTION", "long")
    try:
        direction = Direction.parse(raw_direction)
    except ValueError:
        raise ValueError(
            f"DEFAULT_DIRECTION must be 'long' or 'short', got '{raw_direction}'"
        ) from None

    raw_spread = os.environ.get("SPREAD_PIPS", "1.0")
    try:
        spread_pips = float(raw_spread)
    except ValueError:
        raise ValueError(f"SPREAD_PIPS must be a number, got '{raw_spread}'") from None
    if spread_pips < 0:
        raise ValueError(f"SPREAD_PIPS must not be negative, got {spread_pips}")

    raw_port = os.environ.get("API_PORT", "8080")
    try:
        api_port = int(raw_port)
    except ValueError:
        raise ValueError(f"API_PORT must be an integer, got '{raw_port}'") from None
    if not 0 < api_port < 65536:
        raise ValueError(f"API_PORT must be 1-65535, got {api_port}")

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ValueError(
            f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{log_level}'"
        )

    pair = os.environ.get("DEFAULT_PAIR", "EURUSD").strip().upper()
    if not pair:
        raise ValueError("DEFAULT_PAIR must not be empty")

    return Config(
        default_pair=pair,
        default_direction=direction,
        default_risk_pct=_positive_str("DEFAULT_RISK_PCT", "1"),
        default_rr_ratio=_positive_str("DEFAULT_RR_RATIO", "2"),
        spread_pips=spread_pips,
        log_level=log_level,
        api_port=api_port,
    )
