"""Trade calculator data models — typed records passed between the math
functions and the presentation layer.
"""

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """Trade direction."""

    LONG = "long"
    SHORT = "short"

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """Accept ``long``/``short`` or the ``buy``/``sell`` aliases."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in ("long", "buy"):
            return cls.LONG
        if key in ("short", "sell"):
            return cls.SHORT
        raise ValueError(f"direction must be 'long' or 'short', got '{value}'")


@dataclass(frozen=True)
class TradeInput:
    """Validated calculator input.  All numeric fields are positive."""

    direction: Direction
    pair: str
    entry_price: float
    account_size: float
    risk_percentage: float
    risk_reward_ratio: float
    stop_loss_pips: float


@dataclass(frozen=True)
class TradeResult:
    """Derived trade figures.

    Produced whole by ``calculate_trade`` and patched by the editors in
    ``pipcalc.calc.editors`` (each edit returns a new record).
    """

    risk_amount: float
    pip_value: float
    lot_size: float
    stop_loss_price: float
    take_profit_price: float
    breakeven_price: float
    expected_profit: float


@dataclass(frozen=True)
class TakeProfitLevel:
    """One rung of the take-profit ladder."""

    label: str
    fraction: float
    price: float
