"""Risk-free rate and dividend-yield sources for the Greek indicators.

Both inputs share one abstraction: an annualized rate evaluated at the
indicator's update time. Sources may be constants, date-indexed series, or
custom model objects implementing `RateModel`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Real
from typing import Protocol, TypeAlias, runtime_checkable

import pandas as pd

from option_indicators.options.decimal_math import to_decimal
from option_indicators.options.types import align_timestamp


@runtime_checkable
class RateModel(Protocol):
    """Annualized rate provider evaluated at a date."""

    def annual_rate(self, as_of: pd.Timestamp | None = None) -> Decimal:
        """Return annualized rate (decimal) for the provided date."""


RateInput: TypeAlias = Decimal | float | int | str | pd.Series | Mapping | RateModel

DEFAULT_RISK_FREE_RATE = Decimal("0.05")
DEFAULT_DIVIDEND_YIELD = Decimal("0.0")


@dataclass(frozen=True)
class ConstantRateModel:
    """Constant annualized rate model. Negative values are allowed."""

    rate_annual: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        object.__setattr__(self, "rate_annual", to_decimal(self.rate_annual))

    def annual_rate(self, as_of: pd.Timestamp | None = None) -> Decimal:
        _ = as_of
        return self.rate_annual


@dataclass(frozen=True)
class SeriesRateModel:
    """Date-indexed annualized rate model with as-of lookup.

    For any `as_of` date, the model returns the latest known rate on or before
    that date (forward-filled in time). If `as_of` is earlier than the first
    observation, the first observation is used.
    """

    series: pd.Series
    _prepared: pd.Series = field(init=False, repr=False)

    def __post_init__(self) -> None:
        cleaned = pd.Series(self.series).dropna()
        if cleaned.empty:
            raise ValueError("series rate input must contain at least one non-null row")

        try:
            idx = pd.to_datetime(cleaned.index)
        except (TypeError, ValueError) as exc:
            raise ValueError("series rate input must be indexed by dates") from exc

        prepared = pd.Series(cleaned.astype(float).values, index=idx).sort_index()
        if prepared.index.has_duplicates:
            prepared = prepared.groupby(level=0).last()

        object.__setattr__(self, "_prepared", prepared)

    @classmethod
    def from_mapping(cls, data: Mapping) -> SeriesRateModel:
        """Build from a ``{date: rate}`` mapping (e.g. a YAML block)."""
        return cls(pd.Series({k: float(v) for k, v in data.items()}))

    def annual_rate(self, as_of: pd.Timestamp | None = None) -> Decimal:
        if as_of is None:
            return to_decimal(float(self._prepared.iloc[-1]))

        as_of_ts = align_timestamp(as_of, self._prepared.index[0])
        if as_of_ts <= self._prepared.index[0]:
            return to_decimal(float(self._prepared.iloc[0]))

        position = self._prepared.index.searchsorted(as_of_ts, side="right") - 1
        return to_decimal(float(self._prepared.iloc[int(position)]))


def coerce_rate_model(value: RateInput) -> RateModel:
    """Normalize constant/series/mapping/model input into a `RateModel`."""
    if isinstance(value, RateModel):
        return value
    if isinstance(value, pd.Series):
        return SeriesRateModel(value)
    if isinstance(value, Mapping):
        return SeriesRateModel.from_mapping(value)
    if isinstance(value, bool):
        raise TypeError("rate input must not be a bool")
    if isinstance(value, Decimal | Real | str):
        return ConstantRateModel(to_decimal(value))
    raise TypeError(
        "rate input must be a numeric constant, pandas Series, "
        "date->rate mapping, or RateModel"
    )
