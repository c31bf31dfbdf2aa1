"""Back-solve editors — pure state transitions, no I/O.

Each editor takes the current ``(TradeInput, TradeResult)`` pair plus the
raw value the user typed into one derived field, and returns the next pair.
When the edit cannot be applied (unparseable value, or a price on the wrong
side of entry) the inputs are returned unchanged; callers detect this with
an identity check on the returned result.

Editors never re-validate the whole form.  Two of them write back into the
input record:

- ``edit_stop_loss_price`` replaces ``stop_loss_pips``.
- ``edit_take_profit_price`` replaces ``risk_reward_ratio``.
"""

import logging
from dataclasses import replace

from pipcalc.calc.models import Direction, TradeInput, TradeResult
from pipcalc.calc.pips import pip_value_per_lot, price_distance_to_pips
from pipcalc.calc.validation import parse_positive

logger = logging.getLogger("pipcalc")

Transition = tuple[TradeInput, TradeResult]


def edit_risk_amount(
    trade: TradeInput,
    result: TradeResult,
    new_value,
) -> Transition:
    """Reallocate the money at risk.

    Pip value and lot size follow the new risk amount for the current stop
    distance.  Price levels are unchanged.
    """
    risk_amount = parse_positive(new_value)
    if risk_amount is None:
        logger.debug("Risk amount edit ignored: %r", new_value)
        return trade, result

    pip_value = risk_amount / trade.stop_loss_pips
    updated = replace(
        result,
        risk_amount=risk_amount,
        pip_value=pip_value,
        lot_size=pip_value / pip_value_per_lot(trade.pair),
        expected_profit=risk_amount * trade.risk_reward_ratio,
    )
    return trade, updated


def edit_stop_loss_price(
    trade: TradeInput,
    result: TradeResult,
    new_value,
) -> Transition:
    """Move the stop-loss price, keeping lot size fixed.

    The new pip distance is measured from entry and written back into
    ``trade.stop_loss_pips``; risk amount and expected profit are rescaled
    for the unchanged position size.
    """
    stop_loss_price = parse_positive(new_value)
    if stop_loss_price is None:
        logger.debug("Stop-loss edit ignored: %r", new_value)
        return trade, result

    stop_loss_pips = price_distance_to_pips(
        trade.entry_price,
        stop_loss_price,
        trade.pair,
        profit_side=False,
        long=trade.direction is Direction.LONG,
    )
    if stop_loss_pips <= 0:
        logger.debug(
            "Stop-loss edit ignored: %.5f is on the wrong side of entry %.5f",
            stop_loss_price, trade.entry_price,
        )
        return trade, result

    pip_value = result.lot_size * pip_value_per_lot(trade.pair)
    risk_amount = pip_value * stop_loss_pips
    updated = replace(
        result,
        stop_loss_price=stop_loss_price,
        pip_value=pip_value,
        risk_amount=risk_amount,
        expected_profit=risk_amount * trade.risk_reward_ratio,
    )
    return replace(trade, stop_loss_pips=stop_loss_pips), updated


def edit_take_profit_price(
    trade: TradeInput,
    result: TradeResult,
    new_value,
) -> Transition:
    """Move the take-profit price, deriving a new risk/reward ratio.

    The risk amount is untouched; the new ratio is written back into
    ``trade.risk_reward_ratio``.
    """
    take_profit_price = parse_positive(new_value)
    if take_profit_price is None:
        logger.debug("Take-profit edit ignored: %r", new_value)
        return trade, result

    take_profit_pips = price_distance_to_pips(
        trade.entry_price,
        take_profit_price,
        trade.pair,
        profit_side=True,
        long=trade.direction is Direction.LONG,
    )
    if take_profit_pips <= 0:
        logger.debug(
            "Take-profit edit ignored: %.5f is on the wrong side of entry %.5f",
            take_profit_price, trade.entry_price,
        )
        return trade, result

    ratio = take_profit_pips / trade.stop_loss_pips
    updated = replace(
        result,
        take_profit_price=take_profit_price,
        expected_profit=result.risk_amount * ratio,
    )
    return replace(trade, risk_reward_ratio=ratio), updated
