"""Form validation — raw strings in, a ``TradeInput`` or per-field errors out."""

import math
from typing import Mapping, Optional

from pipcalc.calc.models import Direction, TradeInput

FieldErrors = dict[str, str]

# Numeric form fields in display order, with the message shown when invalid.
_NUMERIC_FIELDS: list[tuple[str, str]] = [
    ("entry_price", "Valid entry price is required"),
    ("account_size", "Valid account size is required"),
    ("risk_percentage", "Valid risk percentage is required"),
    ("risk_reward_ratio", "Valid risk-reward ratio is required"),
    ("stop_loss_pips", "Valid stop loss in pips is required"),
]

FORM_FIELDS = ("direction", "currency_pair") + tuple(f for f, _ in _NUMERIC_FIELDS)


class ValidationError(ValueError):
    """Raised when one or more form fields are invalid.

    ``errors`` maps each offending field name to its message.
    """

    def __init__(self, errors: FieldErrors) -> None:
        self.errors = dict(errors)
        super().__init__(
            "Invalid field(s): " + ", ".join(sorted(self.errors))
        )


def parse_positive(raw) -> Optional[float]:
    """Parse *raw* as a finite number greater than zero.

    Returns ``None`` for blanks, non-numeric text, infinities, NaN and
    values ≤ 0.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def collect_errors(form: Mapping[str, object]) -> FieldErrors:
    """Build a fresh ``{field: message}`` dict for *form*."""
    errors: FieldErrors = {}

    pair = form.get("currency_pair")
    if not isinstance(pair, str) or not pair.strip():
        errors["currency_pair"] = "Currency pair is required"

    for field, message in _NUMERIC_FIELDS:
        if parse_positive(form.get(field)) is None:
            errors[field] = message

    return errors


def validate_form(form: Mapping[str, object]) -> TradeInput:
    """Validate raw form values and build a ``TradeInput``.

    Args:
        form: Mapping with ``direction``, ``currency_pair`` and the numeric
            fields (as strings or numbers).  ``direction`` defaults to long.

    Raises:
        ValidationError: If any field is missing, non-numeric or ≤ 0.
    """
    errors = collect_errors(form)
    if errors:
        raise ValidationError(errors)

    return TradeInput(
        direction=Direction.parse(form.get("direction") or Direction.LONG),
        pair=str(form["currency_pair"]).strip().upper(),
        entry_price=parse_positive(form["entry_price"]),
        account_size=parse_positive(form["account_size"]),
        risk_percentage=parse_positive(form["risk_percentage"]),
        risk_reward_ratio=parse_positive(form["risk_reward_ratio"]),
        stop_loss_pips=parse_positive(form["stop_loss_pips"]),
    )
