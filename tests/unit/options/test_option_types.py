from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from option_indicators.options import (
    MarketSnapshot,
    OptionContract,
    OptionRight,
    PricingModel,
    align_timestamp,
    bs_d1,
    decimal_math,
    dexp,
    dnorm_cdf,
    dsqrt,
    normalize_option_right,
    normalize_pricing_model,
    to_decimal,
)


def test_occ_symbol_parsing():
    call = OptionContract.from_occ_symbol("SPY   240621C00500000")
    put = OptionContract.from_occ_symbol("AAPL250117P00182500")

    assert call.underlying == "SPY"
    assert call.strike == Decimal("500")
    assert call.right == OptionRight.CALL
    assert call.expiry == pd.Timestamp("2024-06-21")
    assert put.underlying == "AAPL"
    assert put.strike == Decimal("182.5")
    assert put.right == OptionRight.PUT
    assert put.expiry == pd.Timestamp("2025-01-17")


@pytest.mark.parametrize("symbol", ["SPY", "SPY 240621X00500000", "SPY 2406C00500000"])
def test_invalid_occ_symbol_raises(symbol):
    with pytest.raises(ValueError, match="OCC"):
        OptionContract.from_occ_symbol(symbol)


def test_contract_coerces_inputs_and_rejects_non_positive_strike():
    contract = OptionContract(strike=101.5, right="C", expiry="2025-03-21")

    assert contract.strike == Decimal("101.5")
    assert contract.right == OptionRight.CALL
    assert contract.expiry == pd.Timestamp("2025-03-21")

    with pytest.raises(ValueError, match="strike must be > 0"):
        OptionContract(strike=0, right="put", expiry="2025-03-21")


def test_snapshot_converts_to_decimal_without_float_artifacts():
    snapshot = MarketSnapshot(underlying_price=100.1, implied_volatility="0.2")

    assert snapshot.underlying_price == Decimal("100.1")
    assert snapshot.implied_volatility == Decimal("0.2")
    assert snapshot.risk_free_rate == Decimal("0.05")
    assert snapshot.dividend_yield == Decimal("0")


@pytest.mark.parametrize(
    ("label", "expected"),
    [("call", OptionRight.CALL), ("C", OptionRight.CALL), ("P", OptionRight.PUT)],
)
def test_normalize_option_right(label, expected):
    assert normalize_option_right(label) == expected


def test_normalize_option_right_rejects_unknown():
    with pytest.raises(ValueError):
        normalize_option_right("straddle")


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("BlackScholes", PricingModel.BLACK_SCHOLES),
        ("bs", PricingModel.BLACK_SCHOLES),
        ("BinomialCoxRossRubinstein", PricingModel.BINOMIAL_CRR),
        ("crr", PricingModel.BINOMIAL_CRR),
    ],
)
def test_normalize_pricing_model(label, expected):
    assert normalize_pricing_model(label) == expected


def test_normalize_pricing_model_rejects_unknown():
    with pytest.raises(ValueError, match="Unknown pricing model"):
        normalize_pricing_model("Heston")


def test_decimal_math_wrappers():
    assert dexp(Decimal(0)) == 1
    assert dsqrt(Decimal("0.25")) == Decimal("0.5")
    assert dnorm_cdf(Decimal(0)) == Decimal("0.5")
    assert decimal_math(abs, Decimal("-1.5")) == Decimal("1.5")


def test_decimal_math_maps_non_finite_results():
    with np.errstate(invalid="ignore"):
        assert dsqrt(Decimal(-1)).is_nan()
    assert dnorm_cdf(Decimal("Infinity")) == 1
    assert dnorm_cdf(Decimal("-Infinity")) == 0


def test_to_decimal():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(3) == Decimal(3)
    assert to_decimal(np.int64(7)) == Decimal(7)
    assert to_decimal(" 0.0525 ") == Decimal("0.0525")
    with pytest.raises(TypeError):
        to_decimal(True)
    with pytest.raises(ValueError):
        to_decimal("five")


def test_bs_d1_signed_limit_when_no_volatility_or_time():
    one = Decimal(1)
    assert bs_d1(Decimal(110), Decimal(100), one, Decimal(0), Decimal(0), Decimal(0)) == Decimal("Infinity")
    assert bs_d1(Decimal(90), Decimal(100), one, Decimal(0), Decimal(0), Decimal(0)) == Decimal("-Infinity")
    assert bs_d1(Decimal(100), Decimal(100), Decimal(0), Decimal("0.05"), Decimal(0), Decimal("0.2")) == 0


def test_bs_d1_matches_closed_form():
    d1 = bs_d1(Decimal(100), Decimal(100), Decimal(1), Decimal("0.05"), Decimal(0), Decimal("0.2"))
    assert float(d1) == pytest.approx(0.35, abs=1e-12)


def test_align_timestamp_matches_reference_zone():
    naive = pd.Timestamp("2024-01-01")
    aware = pd.Timestamp("2024-01-01 09:30", tz="America/New_York")

    assert align_timestamp(aware, naive) == pd.Timestamp("2024-01-01 09:30")
    assert align_timestamp("2024-01-01 09:30", aware) == aware
    assert align_timestamp(naive, naive) == naive
