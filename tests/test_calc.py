"""Tests for the calculation core.

Covers pip sizing, form validation, the forward calculation and the
take-profit ladder.
"""

import pytest

from pipcalc.calc.forward import calculate_risk_amount, calculate_trade
from pipcalc.calc.ladder import take_profit_ladder
from pipcalc.calc.models import Direction, TradeInput
from pipcalc.calc.pips import pip_size, pip_value_per_lot, price_distance_to_pips
from pipcalc.calc.validation import (
    ValidationError,
    collect_errors,
    parse_positive,
    validate_form,
)


# ── Helpers ──────────────────────────────────────────────────────────────


def _make_trade(**overrides) -> TradeInput:
    """EURUSD long at 1.10000, $10k account, 1% risk, 1:2, 50 pip stop."""
    defaults = dict(
        direction=Direction.LONG,
        pair="EURUSD",
        entry_price=1.10000,
        account_size=10_000.0,
        risk_percentage=1.0,
        risk_reward_ratio=2.0,
        stop_loss_pips=50.0,
    )
    defaults.update(overrides)
    return TradeInput(**defaults)


def _valid_form(**overrides) -> dict:
    form = {
        "direction": "long",
        "currency_pair": "EURUSD",
        "entry_price": "1.10000",
        "account_size": "10000",
        "risk_percentage": "1",
        "risk_reward_ratio": "2",
        "stop_loss_pips": "50",
    }
    form.update(overrides)
    return form


# ── Pips ─────────────────────────────────────────────────────────────────


class TestPips:
    def test_standard_pair(self):
        assert pip_size("EURUSD") == 0.0001
        assert pip_size("GBPUSD") == 0.0001

    def test_jpy_pair(self):
        assert pip_size("USDJPY") == 0.01
        assert pip_size("EURJPY") == 0.01

    def test_lowercase_jpy(self):
        assert pip_size("gbpjpy") == 0.01

    def test_pip_value_per_lot(self):
        assert pip_value_per_lot("EURUSD") == pytest.approx(10.0)
        assert pip_value_per_lot("USDJPY") == pytest.approx(1000.0)

    def test_distance_long_stop(self):
        """Long stop below entry is a positive distance."""
        pips = price_distance_to_pips(1.1000, 1.0950, "EURUSD", profit_side=False, long=True)
        assert pips == pytest.approx(50.0)

    def test_distance_short_target(self):
        pips = price_distance_to_pips(1.1000, 1.0900, "EURUSD", profit_side=True, long=False)
        assert pips == pytest.approx(100.0)

    def test_distance_wrong_side_is_negative(self):
        pips = price_distance_to_pips(1.1000, 1.1050, "EURUSD", profit_side=False, long=True)
        assert pips == pytest.approx(-50.0)


# ── Validation ───────────────────────────────────────────────────────────


class TestValidation:
    def test_valid_form(self):
        trade = validate_form(_valid_form())
        assert trade == _make_trade()

    def test_pair_trimmed_and_uppercased(self):
        trade = validate_form(_valid_form(currency_pair="  usdjpy "))
        assert trade.pair == "USDJPY"

    def test_direction_aliases(self):
        assert validate_form(_valid_form(direction="sell")).direction is Direction.SHORT
        assert validate_form(_valid_form(direction="buy")).direction is Direction.LONG

    def test_blank_pair_rejected(self):
        errors = collect_errors(_valid_form(currency_pair="   "))
        assert errors == {"currency_pair": "Currency pair is required"}

    @pytest.mark.parametrize("raw", ["", "abc", "0", "-5", "inf", "nan", None])
    def test_invalid_stop_loss_pips(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            validate_form(_valid_form(stop_loss_pips=raw))
        assert exc_info.value.errors == {
            "stop_loss_pips": "Valid stop loss in pips is required",
        }

    def test_all_fields_reported(self):
        errors = collect_errors({"currency_pair": ""})
        assert set(errors) == {
            "currency_pair",
            "entry_price",
            "account_size",
            "risk_percentage",
            "risk_reward_ratio",
            "stop_loss_pips",
        }
        assert errors["risk_reward_ratio"] == "Valid risk-reward ratio is required"

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError, match="entry_price"):
            validate_form(_valid_form(entry_price="-1"))

    def test_parse_positive_accepts_numbers(self):
        assert parse_positive(2) == 2.0
        assert parse_positive(" 1.5 ") == 1.5
        assert parse_positive(True) is None


# ── Forward calculation ──────────────────────────────────────────────────


class TestForwardCalculation:
    def test_risk_amount(self):
        assert calculate_risk_amount(10_000.0, 1.0) == pytest.approx(100.0)

    def test_eurusd_long(self):
        """$10k, 1%, 50 pips, 1:2 → 0.2 lots, SL 1.09500, TP 1.11000."""
        r = calculate_trade(_make_trade())
        assert r.risk_amount == pytest.approx(100.0)
        assert r.pip_value == pytest.approx(2.0)
        assert r.lot_size == pytest.approx(0.2)
        assert r.stop_loss_price == pytest.approx(1.09500, abs=1e-9)
        assert r.take_profit_price == pytest.approx(1.11000, abs=1e-9)
        assert r.breakeven_price == pytest.approx(1.10010, abs=1e-9)
        assert r.expected_profit == pytest.approx(200.0)

    def test_usdjpy_uses_larger_pip(self):
        r = calculate_trade(_make_trade(pair="USDJPY"))
        # SL = 1.1 - 50 * 0.01
        assert r.stop_loss_price == pytest.approx(1.10000 - 0.5)
        assert r.take_profit_price == pytest.approx(1.10000 + 1.0)
        assert r.lot_size == pytest.approx(0.002)
        assert r.pip_value == pytest.approx(2.0)

    def test_eurusd_short(self):
        r = calculate_trade(_make_trade(direction=Direction.SHORT))
        assert r.stop_loss_price == pytest.approx(1.10500, abs=1e-9)
        assert r.take_profit_price == pytest.approx(1.09000, abs=1e-9)
        assert r.breakeven_price == pytest.approx(1.09990, abs=1e-9)

    def test_direction_symmetry(self):
        entry = 1.10000
        long_r = calculate_trade(_make_trade())
        short_r = calculate_trade(_make_trade(direction=Direction.SHORT))
        assert long_r.stop_loss_price - entry == pytest.approx(entry - short_r.stop_loss_price)
        assert long_r.take_profit_price - entry == pytest.approx(entry - short_r.take_profit_price)
        assert long_r.lot_size == short_r.lot_size
        assert long_r.expected_profit == short_r.expected_profit

    def test_pure(self):
        trade = _make_trade()
        assert calculate_trade(trade) == calculate_trade(trade)

    def test_risk_matches_pip_value_times_stop(self):
        trade = _make_trade(stop_loss_pips=37.0, risk_percentage=1.5)
        r = calculate_trade(trade)
        assert r.risk_amount == pytest.approx(r.pip_value * trade.stop_loss_pips)

    def test_custom_spread(self):
        r = calculate_trade(_make_trade(), spread_pips=2.5)
        assert r.breakeven_price == pytest.approx(1.10025, abs=1e-9)

    def test_rejects_zero_stop(self):
        with pytest.raises(ValueError, match="stop_loss_pips"):
            calculate_trade(_make_trade(stop_loss_pips=0.0))

    def test_rejects_negative_spread(self):
        with pytest.raises(ValueError, match="spread_pips"):
            calculate_trade(_make_trade(), spread_pips=-1.0)


# ── Take-profit ladder ───────────────────────────────────────────────────


class TestLadder:
    def test_long_ladder(self):
        levels = take_profit_ladder(1.10000, 1.11000, Direction.LONG)
        assert [lvl.label for lvl in levels] == ["TP1 (33%)", "TP2 (66%)", "TP3 (100%)"]
        assert levels[0].price == pytest.approx(1.10330)
        assert levels[1].price == pytest.approx(1.10660)
        assert levels[2].price == pytest.approx(1.11000)

    def test_short_ladder(self):
        levels = take_profit_ladder(1.10000, 1.09000, Direction.SHORT)
        assert levels[0].price == pytest.approx(1.09670)
        assert levels[1].price == pytest.approx(1.09340)
        assert levels[2].price == pytest.approx(1.09000)

    def test_accepts_direction_string(self):
        levels = take_profit_ladder(150.00, 151.00, "long")
        assert levels[2].price == pytest.approx(151.00)
