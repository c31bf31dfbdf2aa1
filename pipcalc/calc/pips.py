"""Pip arithmetic — pure math, no I/O."""

STANDARD_LOT_UNITS = 100_000

JPY_PIP_SIZE = 0.01
DEFAULT_PIP_SIZE = 0.0001


def pip_size(pair: str) -> float:
    """Return the price increment of one pip for *pair*.

    Pairs quoted against the yen move in 0.01 steps, everything else in
    0.0001 steps.
    """
    if "JPY" in pair.upper():
        return JPY_PIP_SIZE
    return DEFAULT_PIP_SIZE


def pip_value_per_lot(pair: str) -> float:
    """Money value of one pip for one standard lot."""
    return pip_size(pair) * STANDARD_LOT_UNITS


def price_distance_to_pips(
    entry_price: float,
    price: float,
    pair: str,
    profit_side: bool,
    long: bool,
) -> float:
    """Signed pip distance from *entry_price* to *price*.

    Positive when *price* sits on the expected side of entry: above entry
    for a long take-profit or a short stop-loss, below it otherwise.

    Args:
        entry_price: Trade entry price.
        price: The stop-loss or take-profit price being measured.
        pair: Currency pair (selects the pip size).
        profit_side: ``True`` for a take-profit, ``False`` for a stop-loss.
        long: ``True`` for a long trade.
    """
    delta = (price - entry_price) / pip_size(pair)
    if profit_side == long:
        return delta
    return -delta
