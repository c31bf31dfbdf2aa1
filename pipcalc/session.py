"""Calculator session — one form, its validation errors and its result.

The session has two states:

- ``empty``: no result yet (initial).
- ``populated``: a forward calculation has succeeded.

Only ``calculate()`` moves the session from empty to populated.  The three
edit methods are no-ops while empty.
"""

import logging
from dataclasses import asdict, replace
from typing import Optional

from pipcalc.calc.editors import (
    edit_risk_amount,
    edit_stop_loss_price,
    edit_take_profit_price,
)
from pipcalc.calc.forward import calculate_trade
from pipcalc.calc.ladder import take_profit_ladder
from pipcalc.calc.models import Direction, TakeProfitLevel, TradeInput, TradeResult
from pipcalc.calc.validation import (
    FORM_FIELDS,
    FieldErrors,
    collect_errors,
    parse_positive,
    validate_form,
)

logger = logging.getLogger("pipcalc")

EMPTY = "empty"
POPULATED = "populated"

_DEFAULT_FORM: dict[str, str] = {
    "direction": Direction.LONG.value,
    "currency_pair": "EURUSD",
    "entry_price": "",
    "account_size": "",
    "risk_percentage": "1",
    "risk_reward_ratio": "2",
    "stop_loss_pips": "",
}


class CalculatorSession:
    """Holds the raw form, the last calculation and the editable fields.

    Args:
        form: Initial raw form values (missing keys fall back to defaults).
        spread_pips: Spread assumed for the breakeven price.
    """

    def __init__(
        self,
        form: Optional[dict[str, str]] = None,
        spread_pips: float = 1.0,
    ) -> None:
        self._form: dict[str, str] = dict(_DEFAULT_FORM)
        self._spread_pips = spread_pips
        self._trade: Optional[TradeInput] = None
        self._result: Optional[TradeResult] = None
        self._errors: FieldErrors = {}
        self._editable: dict[str, str] = {
            "risk_amount": "",
            "stop_loss": "",
            "take_profit": "",
        }
        self._last_edit_applied: Optional[bool] = None
        if form:
            self.update_form(form)

    # ── Form input ───────────────────────────────────────────────────────

    def set_field(self, name: str, value) -> None:
        """Store one raw form value.  Does not recalculate."""
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: '{name}'")
        if name == "direction":
            value = Direction.parse(value).value
        elif name == "currency_pair":
            value = "" if value is None else str(value).upper()
        else:
            value = "" if value is None else str(value)
        self._form[name] = value

    def update_form(self, values: dict) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    # ── Forward calculation ──────────────────────────────────────────────

    def calculate(self) -> bool:
        """Validate the form and run the forward calculation.

        On failure the per-field errors are stored and the previous result
        (if any) is kept.  Returns ``True`` on success.
        """
        self._errors = collect_errors(self._form)
        if self._errors:
            logger.info("Calculation blocked: %s", ", ".join(self._errors))
            return False

        trade = validate_form(self._form)
        result = calculate_trade(trade, spread_pips=self._spread_pips)

        self._trade = trade
        self._result = result
        self._last_edit_applied = None
        self._editable = {
            "risk_amount": f"{result.risk_amount:.2f}",
            "stop_loss": f"{result.stop_loss_price:.5f}",
            "take_profit": f"{result.take_profit_price:.5f}",
        }
        logger.info(
            "Calculated %s %s: risk=%.2f lots=%.2f SL=%.5f TP=%.5f",
            trade.direction.value, trade.pair, result.risk_amount,
            result.lot_size, result.stop_loss_price, result.take_profit_price,
        )
        return True

    # ── Back-solve edits ─────────────────────────────────────────────────

    def edit_risk_amount(self, raw: str) -> bool:
        """Apply a typed risk amount.  Returns ``True`` if it took effect."""
        self._editable["risk_amount"] = raw
        return self._apply("risk amount", edit_risk_amount, raw)

    def edit_stop_loss(self, raw: str) -> bool:
        """Apply a typed stop-loss price.

        On success the new pip distance is written back into the form's
        ``stop_loss_pips`` field and the editable risk amount is reseeded.
        """
        self._editable["stop_loss"] = raw
        applied = self._apply("stop loss", edit_stop_loss_price, raw)
        if applied:
            self._form["stop_loss_pips"] = str(self._trade.stop_loss_pips)
            self._editable["risk_amount"] = f"{self._result.risk_amount:.2f}"
        return applied

    def edit_take_profit(self, raw: str) -> bool:
        """Apply a typed take-profit price.

        On success the derived ratio is written back into the form's
        ``risk_reward_ratio`` field, rounded to two decimals.
        """
        self._editable["take_profit"] = raw
        applied = self._apply("take profit", edit_take_profit_price, raw)
        if applied:
            self._form["risk_reward_ratio"] = f"{self._trade.risk_reward_ratio:.2f}"
        return applied

    def _apply(self, label: str, editor, raw: str) -> bool:
        if self._result is None:
            return False
        trade, result = editor(self._live_trade(), self._result, raw)
        applied = result is not self._result
        self._last_edit_applied = applied
        if applied:
            self._trade, self._result = trade, result
            logger.info(
                "Edited %s: risk=%.2f sl_pips=%.1f rr=%.2f",
                label, result.risk_amount, trade.stop_loss_pips,
                trade.risk_reward_ratio,
            )
        return applied

    def _live_trade(self) -> TradeInput:
        """The stored input overlaid with whatever the form currently holds.

        Edits read the live form, so values typed since the last calculation
        (or a ratio rounded by a take-profit write-back) are used.  A field
        that does not parse keeps its stored value.
        """
        overlay = {}
        for field in ("entry_price", "risk_reward_ratio", "stop_loss_pips"):
            value = parse_positive(self._form.get(field))
            if value is not None:
                overlay[field] = value
        pair = self._form.get("currency_pair", "").strip()
        if pair:
            overlay["pair"] = pair.upper()
        try:
            overlay["direction"] = Direction.parse(self._form.get("direction", ""))
        except ValueError:
            pass  # keep the stored direction
        return replace(self._trade, **overlay)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def state(self) -> str:
        return POPULATED if self._result is not None else EMPTY

    @property
    def form(self) -> dict[str, str]:
        return dict(self._form)

    @property
    def errors(self) -> FieldErrors:
        return dict(self._errors)

    @property
    def trade(self) -> Optional[TradeInput]:
        return self._trade

    @property
    def result(self) -> Optional[TradeResult]:
        return self._result

    @property
    def editable(self) -> dict[str, str]:
        return dict(self._editable)

    @property
    def last_edit_applied(self) -> Optional[bool]:
        """Outcome of the most recent edit, ``None`` if none since calculate."""
        return self._last_edit_applied

    def ladder(self) -> list[TakeProfitLevel]:
        """Take-profit levels for the current result (empty while empty)."""
        if self._result is None:
            return []
        return take_profit_ladder(
            self._trade.entry_price,
            self._result.take_profit_price,
            self._trade.direction,
        )

    def copy_targets(self) -> dict[str, tuple[str, float]]:
        """Copyable prices keyed by field name, as ``(label, value)``."""
        if self._result is None:
            return {}
        targets = {
            "stop_loss": ("Stop Loss", self._result.stop_loss_price),
            "take_profit": ("Take Profit", self._result.take_profit_price),
            "breakeven": ("Breakeven", self._result.breakeven_price),
        }
        for i, level in enumerate(self.ladder(), start=1):
            targets[f"tp{i}"] = (level.label, level.price)
        return targets

    def snapshot(self) -> dict:
        """JSON-ready view of the whole session."""
        trade = None
        if self._trade is not None:
            trade = asdict(self._trade)
            trade["direction"] = self._trade.direction.value
        return {
            "state": self.state,
            "form": self.form,
            "errors": self.errors,
            "trade": trade,
            "result": asdict(self._result) if self._result is not None else None,
            "editable": self.editable,
            "ladder": [asdict(level) for level in self.ladder()],
            "last_edit_applied": self._last_edit_applied,
        }
