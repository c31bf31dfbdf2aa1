"""Take-profit ladder — partial exit levels between entry and target."""

from pipcalc.calc.models import Direction, TakeProfitLevel

LADDER_FRACTIONS: list[tuple[str, float]] = [
    ("TP1 (33%)", 0.33),
    ("TP2 (66%)", 0.66),
    ("TP3 (100%)", 1.0),
]


def take_profit_ladder(
    entry_price: float,
    take_profit_price: float,
    direction: Direction,
) -> list[TakeProfitLevel]:
    """Split the entry → take-profit distance into three exit levels.

    The distance is taken as an absolute value and re-applied in the
    trade's profit direction, so a ladder is always on the profit side of
    entry even if the stored target is not.
    """
    distance = abs(take_profit_price - entry_price)
    sign = 1.0 if Direction.parse(direction) is Direction.LONG else -1.0
    return [
        TakeProfitLevel(
            label=label,
            fraction=fraction,
            price=entry_price + sign * distance * fraction,
        )
        for label, fraction in LADDER_FRACTIONS
    ]
