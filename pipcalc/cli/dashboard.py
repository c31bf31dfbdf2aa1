"""CLI dashboard — prints a calculation report to the console."""

from pipcalc.session import CalculatorSession


def print_report(session: CalculatorSession) -> str:
    """Format and print the current session.

    Shows field errors when the last calculation was blocked, otherwise the
    metrics, price levels and take-profit ladder.

    Returns:
        The formatted string (also printed to stdout).
    """
    errors = session.errors
    result = session.result
    trade = session.trade

    if errors:
        lines = ["──────────────── PipCalc Errors ──────────────────"]
        lines += [f"  {field:<18} {message}" for field, message in errors.items()]
    elif result is None:
        lines = ["──────────────── PipCalc ──────────────────────────",
                 "  No calculation yet."]
    else:
        side = "LONG" if trade.direction.value == "long" else "SHORT"
        lines = [
            "──────────────── PipCalc Report ──────────────────",
            f"  Pair:            {trade.pair} ({side})",
            f"  Entry:           {trade.entry_price:.5f}",
            f"  Stop (pips):     {trade.stop_loss_pips:g}",
            f"  R:R:             1:{trade.risk_reward_ratio:.2f}",
            "  ── Metrics ──",
            f"  Risk Amount:     ${result.risk_amount:,.2f}",
            f"  Pip Value:       ${result.pip_value:,.2f}",
            f"  Lot Size:        {result.lot_size:.2f}",
            f"  Expected Profit: ${result.expected_profit:,.2f}",
            "  ── Levels ──",
            f"  Stop Loss:       {result.stop_loss_price:.5f}",
            f"  Take Profit:     {result.take_profit_price:.5f}",
            f"  Breakeven:       {result.breakeven_price:.5f}",
            "  ── Take Profit Levels ──",
        ]
        lines += [
            f"  {level.label:<16} {level.price:.5f}" for level in session.ladder()
        ]
    lines.append("──────────────────────────────────────────────────")
    output = "\n".join(lines)
    print(output)
    return output
