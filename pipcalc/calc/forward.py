"""Forward trade calculation — pure math, no I/O.

Derives position size, monetary risk and price targets from a validated
``TradeInput``.
"""

from pipcalc.calc.models import Direction, TradeInput, TradeResult
from pipcalc.calc.pips import STANDARD_LOT_UNITS, pip_size


def calculate_risk_amount(account_size: float, risk_percentage: float) -> float:
    """Money at risk for *risk_percentage* percent of *account_size*."""
    return account_size * risk_percentage / 100.0


def calculate_trade(trade: TradeInput, spread_pips: float = 1.0) -> TradeResult:
    """Run the full forward calculation.

    Formula::

        risk_amount     = account_size × risk_pct / 100
        pip_value       = risk_amount / sl_pips
        lot_size        = pip_value / (pip_size × 100 000)
        sl_distance     = sl_pips × pip_size
        tp_distance     = sl_pips × rr_ratio × pip_size
        expected_profit = risk_amount × rr_ratio

    Long trades place SL below entry and TP above it; short trades invert
    both.  Breakeven sits *spread_pips* beyond entry in the profit
    direction.

    Args:
        trade: Validated input.
        spread_pips: Assumed spread cost in pips for the breakeven price.

    Returns:
        A complete ``TradeResult``.

    Raises:
        ValueError: If ``stop_loss_pips`` is non-positive or
            *spread_pips* is negative.
    """
    if trade.stop_loss_pips <= 0:
        raise ValueError(
            f"stop_loss_pips must be positive, got {trade.stop_loss_pips}"
        )
    if spread_pips < 0:
        raise ValueError(f"spread_pips must not be negative, got {spread_pips}")

    risk_amount = calculate_risk_amount(trade.account_size, trade.risk_percentage)
    size = pip_size(trade.pair)

    pip_value = risk_amount / trade.stop_loss_pips
    lot_size = pip_value / (size * STANDARD_LOT_UNITS)

    sl_distance = trade.stop_loss_pips * size
    tp_distance = trade.stop_loss_pips * trade.risk_reward_ratio * size
    spread = spread_pips * size

    if trade.direction is Direction.LONG:
        stop_loss_price = trade.entry_price - sl_distance
        take_profit_price = trade.entry_price + tp_distance
        breakeven_price = trade.entry_price + spread
    else:
        stop_loss_price = trade.entry_price + sl_distance
        take_profit_price = trade.entry_price - tp_distance
        breakeven_price = trade.entry_price - spread

    return TradeResult(
        risk_amount=risk_amount,
        pip_value=pip_value,
        lot_size=lot_size,
        stop_loss_price=stop_loss_price,
        take_profit_price=take_profit_price,
        breakeven_price=breakeven_price,
        expected_profit=risk_amount * trade.risk_reward_ratio,
    )
