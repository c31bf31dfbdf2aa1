"""PipCalc — application entry point.

Boots the FastAPI calculator API and provides the CLI entry point for the
``calc`` and ``serve`` commands.
"""

import logging

from fastapi import FastAPI

from pipcalc.api.routers import router

app = FastAPI(title="PipCalc API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("pipcalc")


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="PipCalc trade risk calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    calc = sub.add_parser("calc", help="Calculate once and print a report")
    calc.add_argument("--direction", choices=["long", "short", "buy", "sell"])
    calc.add_argument("--pair", help="Currency pair, e.g. EURUSD")
    calc.add_argument("--entry", default="", help="Entry price")
    calc.add_argument("--account", default="", help="Account size")
    calc.add_argument("--risk", help="Risk percentage of account")
    calc.add_argument("--rr", help="Risk/reward ratio")
    calc.add_argument("--sl-pips", default="", help="Stop-loss distance in pips")
    calc.add_argument("--edit-risk", help="Then edit the risk amount")
    calc.add_argument("--edit-sl", help="Then edit the stop-loss price")
    calc.add_argument("--edit-tp", help="Then edit the take-profit price")
    calc.add_argument(
        "--copy",
        choices=["stop_loss", "take_profit", "breakeven", "tp1", "tp2", "tp3"],
        help="Copy a price level to the clipboard",
    )

    serve = sub.add_parser("serve", help="Run the calculator API")
    serve.add_argument("--port", type=int, help="Port (default: API_PORT)")
    return parser


def _run_cli(argv=None) -> int:
    """Parse CLI arguments and dispatch to the requested command."""
    from pipcalc.config import load_config

    args = _build_parser().parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "serve":
        _serve(config, args.port or config.api_port)
        return 0
    return _run_calc(config, args)


def _run_calc(config, args) -> int:
    """Run one calculation (plus optional edits) and print the report."""
    from pipcalc.cli.dashboard import print_report
    from pipcalc.clipboard import copy_value
    from pipcalc.session import CalculatorSession

    session = CalculatorSession(
        form=config.form_defaults(), spread_pips=config.spread_pips,
    )
    fields = {
        "direction": args.direction,
        "currency_pair": args.pair,
        "entry_price": args.entry,
        "account_size": args.account,
        "risk_percentage": args.risk,
        "risk_reward_ratio": args.rr,
        "stop_loss_pips": args.sl_pips,
    }
    session.update_form({k: v for k, v in fields.items() if v is not None})

    if not session.calculate():
        print_report(session)
        return 2

    edits = [
        (args.edit_risk, session.edit_risk_amount, "risk amount"),
        (args.edit_sl, session.edit_stop_loss, "stop loss"),
        (args.edit_tp, session.edit_take_profit, "take profit"),
    ]
    for raw, edit, label in edits:
        if raw is not None and not edit(raw):
            logger.warning("Edit of %s to %s was not applied.", label, raw)

    print_report(session)

    if args.copy:
        label, value = session.copy_targets()[args.copy]
        note = copy_value(value, label)
        print(f"{note.title} {note.description}")
    return 0


def _serve(config, port: int) -> None:
    """Start the API under uvicorn with settings from *config*."""
    import uvicorn

    from pipcalc.api.routers import configure_routers

    configure_routers(
        form_defaults=config.form_defaults(), spread_pips=config.spread_pips,
    )
    logger.info("PipCalc API available at http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="info")


if __name__ == "__main__":
    raise SystemExit(_run_cli())
