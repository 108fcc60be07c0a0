from decimal import Decimal

import pandas as pd
import pytest

from option_indicators.rates import (
    ConstantRateModel,
    RateModel,
    SeriesRateModel,
    coerce_rate_model,
)


def test_constant_rate_model_returns_constant_decimal():
    model = ConstantRateModel(rate_annual=0.03)

    assert model.annual_rate() == Decimal("0.03")
    assert model.annual_rate(pd.Timestamp("2020-01-01")) == Decimal("0.03")


def test_constant_rate_model_allows_negative_rates():
    assert ConstantRateModel(Decimal("-0.005")).annual_rate() == Decimal("-0.005")


def test_series_rate_model_uses_asof_lookup_and_first_value_floor():
    series = pd.Series(
        [0.01, 0.015, 0.02],
        index=pd.to_datetime(["2020-01-02", "2020-01-10", "2020-01-20"]),
    )
    model = SeriesRateModel(series)

    assert model.annual_rate(pd.Timestamp("2019-12-31")) == Decimal("0.01")
    assert model.annual_rate(pd.Timestamp("2020-01-15")) == Decimal("0.015")
    assert model.annual_rate(pd.Timestamp("2020-01-25")) == Decimal("0.02")
    assert model.annual_rate() == Decimal("0.02")


def test_series_rate_model_rejects_empty_series():
    with pytest.raises(ValueError, match="at least one non-null row"):
        SeriesRateModel(pd.Series([None], index=pd.to_datetime(["2020-01-01"])))


def test_coerce_rate_model_accepts_constants_series_and_mappings():
    numeric_model = coerce_rate_model(0.025)
    decimal_model = coerce_rate_model(Decimal("0.0525"))
    series_model = coerce_rate_model(
        pd.Series([0.01, 0.02], index=pd.to_datetime(["2020-01-01", "2020-01-02"]))
    )
    mapping_model = coerce_rate_model({"2020-01-01": Decimal("0.01"), "2020-02-01": 0.02})

    assert numeric_model.annual_rate(pd.Timestamp("2020-01-01")) == Decimal("0.025")
    assert decimal_model.annual_rate() == Decimal("0.0525")
    assert series_model.annual_rate(pd.Timestamp("2020-01-02")) == Decimal("0.02")
    assert mapping_model.annual_rate(pd.Timestamp("2020-01-15")) == Decimal("0.01")


def test_coerce_rate_model_passes_custom_models_through():
    class FlatCurve:
        def annual_rate(self, as_of=None) -> Decimal:
            return Decimal("0.04")

    curve = FlatCurve()
    assert isinstance(curve, RateModel)
    assert coerce_rate_model(curve) is curve


@pytest.mark.parametrize("value", [[0.01], None, True])
def test_coerce_rate_model_rejects_unsupported_inputs(value):
    with pytest.raises(TypeError):
        coerce_rate_model(value)


def test_series_rate_model_accepts_tz_aware_as_of():
    series = pd.Series(
        [0.01, 0.02],
        index=pd.to_datetime(["2020-01-02", "2020-01-10"]),
    )
    naive = SeriesRateModel(series)
    aware = SeriesRateModel(series.tz_localize("America/New_York"))

    assert naive.annual_rate(
        pd.Timestamp("2020-01-10 09:30", tz="America/New_York")
    ) == Decimal("0.02")
    assert aware.annual_rate(pd.Timestamp("2020-01-05")) == Decimal("0.01")
