"""Calculator API routers — /session, /form, /calculate, /edit, /ladder, /copy.

No math here. Delegates to the shared ``CalculatorSession``.
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter

from pipcalc.calc.models import Direction
from pipcalc.clipboard import format_price
from pipcalc.session import CalculatorSession

logger = logging.getLogger("pipcalc")
router = APIRouter()

# ── Shared state (set during app startup) ────────────────────────────────

_session = CalculatorSession()
_form_defaults: Optional[dict[str, str]] = None  # Set via configure_routers()
_spread_pips: float = 1.0                        # Set via configure_routers()


def configure_routers(
    form_defaults: Optional[dict[str, str]] = None,
    spread_pips: float = 1.0,
) -> None:
    """Inject settings from the application startup and start a new session.

    Args:
        form_defaults: Initial raw form values (``Config.form_defaults()``).
        spread_pips: Spread assumed for the breakeven price.
    """
    global _form_defaults, _spread_pips  # noqa: PLW0603
    _form_defaults = dict(form_defaults) if form_defaults else None
    _spread_pips = spread_pips
    _reset_session()


def get_session() -> CalculatorSession:
    """Return the active session (for tests and the CLI)."""
    return _session


def _reset_session() -> None:
    global _session  # noqa: PLW0603
    _session = CalculatorSession(form=_form_defaults, spread_pips=_spread_pips)


def _edit_response(applied: bool) -> dict:
    return {"status": "ok", "applied": applied, **_session.snapshot()}


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get("/session")
async def get_session_snapshot():
    """Return the full session: form, errors, result, editable fields, ladder."""
    return _session.snapshot()


@router.post("/reset")
async def reset_session():
    """Discard the current session and start from the configured defaults."""
    _reset_session()
    logger.info("Session reset.")
    return _session.snapshot()


@router.post("/form")
async def post_form(body: dict):
    """Update raw form fields.  Unknown fields are reported, not stored."""
    errors = {}
    for name, value in body.items():
        try:
            _session.set_field(name, value)
        except ValueError as exc:
            errors[name] = str(exc)
    if errors:
        return {"status": "error", "errors": errors}
    return {"status": "ok", "form": _session.form}


@router.post("/direction")
async def post_direction(body: dict):
    """Switch between long and short.  Takes effect on the next calculation."""
    try:
        direction = Direction.parse(body.get("direction", ""))
    except ValueError as exc:
        return {"status": "error", "errors": {"direction": str(exc)}}
    _session.set_field("direction", direction)
    return {"status": "ok", "form": _session.form}


@router.post("/calculate")
async def post_calculate(body: Optional[dict] = None):
    """Validate the form (optionally updated by *body*) and calculate."""
    if body:
        form_response = await post_form(body)
        if form_response["status"] == "error":
            return form_response
    if not _session.calculate():
        return {"status": "error", "errors": _session.errors}
    return {"status": "ok", **_session.snapshot()}


@router.post("/edit/risk-amount")
async def edit_risk_amount(body: dict):
    """Back-solve pip value and lot size from a typed risk amount."""
    return _edit_response(_session.edit_risk_amount(str(body.get("value", ""))))


@router.post("/edit/stop-loss")
async def edit_stop_loss(body: dict):
    """Back-solve stop distance and risk from a typed stop-loss price."""
    return _edit_response(_session.edit_stop_loss(str(body.get("value", ""))))


@router.post("/edit/take-profit")
async def edit_take_profit(body: dict):
    """Back-solve the risk/reward ratio from a typed take-profit price."""
    return _edit_response(_session.edit_take_profit(str(body.get("value", ""))))


@router.get("/ladder")
async def get_ladder():
    """Return the take-profit ladder for the current result."""
    return {"levels": [asdict(level) for level in _session.ladder()]}


@router.get("/copy/{field}")
async def get_copy_text(field: str):
    """Return the clipboard text for a price field.

    The browser performs the actual clipboard write.
    """
    targets = _session.copy_targets()
    if field not in targets:
        return {"error": f"Nothing to copy for: {field}"}
    label, value = targets[field]
    return {"label": label, "text": format_price(value)}
