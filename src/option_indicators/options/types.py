"""Shared option contract, market snapshot and model enums."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum
from typing import Literal, TypeAlias

import pandas as pd

from option_indicators.options.decimal_math import to_decimal


class OptionRight(StrEnum):
    """Canonical option right labels used across pricing code."""

    CALL = "call"
    PUT = "put"


# Tolerant input type accepted at system boundaries (vendor data/tests).
OptionRightInput: TypeAlias = OptionRight | Literal["call", "put", "C", "P"]


class PricingModel(StrEnum):
    """Option pricing models available to the Greek indicators."""

    BLACK_SCHOLES = "BlackScholes"
    BINOMIAL_CRR = "BinomialCoxRossRubinstein"


_RIGHT_ALIASES: dict[str, OptionRight] = {
    "call": OptionRight.CALL,
    "c": OptionRight.CALL,
    "put": OptionRight.PUT,
    "p": OptionRight.PUT,
}

_MODEL_ALIASES: dict[str, PricingModel] = {
    "blackscholes": PricingModel.BLACK_SCHOLES,
    "black_scholes": PricingModel.BLACK_SCHOLES,
    "bs": PricingModel.BLACK_SCHOLES,
    "binomialcoxrossrubinstein": PricingModel.BINOMIAL_CRR,
    "binomial_cox_ross_rubinstein": PricingModel.BINOMIAL_CRR,
    "binomial": PricingModel.BINOMIAL_CRR,
    "crr": PricingModel.BINOMIAL_CRR,
}


def normalize_option_right(right: OptionRightInput | str) -> OptionRight:
    """Normalize option right labels to `OptionRight`."""
    if isinstance(right, OptionRight):
        return right
    try:
        return _RIGHT_ALIASES[str(right).strip().lower()]
    except KeyError as exc:
        raise ValueError(
            "option right must be one of {'call', 'put', 'C', 'P'}"
        ) from exc


def normalize_pricing_model(model: PricingModel | str) -> PricingModel:
    """Normalize pricing-model labels (enum values or short aliases)."""
    if isinstance(model, PricingModel):
        return model
    key = str(model).strip().lower()
    try:
        return _MODEL_ALIASES[key]
    except KeyError as exc:
        raise ValueError(
            f"Unknown pricing model {model!r}. "
            f"Available: {[m.value for m in PricingModel]}"
        ) from exc


def align_timestamp(value, reference: pd.Timestamp) -> pd.Timestamp:
    """Return `value` as a Timestamp that can be compared with `reference`.

    A tz-aware value against a naive reference keeps its wall-clock time and
    drops the zone. A naive value against a tz-aware reference is localized to
    the reference's zone.
    """
    ts = pd.Timestamp(value)
    if reference.tz is None and ts.tz is not None:
        return ts.tz_localize(None)
    if reference.tz is not None and ts.tz is None:
        return ts.tz_localize(
            reference.tz, ambiguous=True, nonexistent="shift_forward"
        )
    return ts


# OCC/OSI option symbol: 6-char padded root, YYMMDD, C/P, strike * 1000.
_OCC_SYMBOL = re.compile(
    r"^(?P<root>[A-Z0-9.]{1,6})\s*(?P<expiry>\d{6})(?P<right>[CP])(?P<strike>\d{8})$"
)


@dataclass(frozen=True)
class OptionContract:
    """Contract terms tracked by a Greek indicator.

    `expiry` is normalized to a `pd.Timestamp`; `strike` to `Decimal`.
    """

    strike: Decimal
    right: OptionRight
    expiry: pd.Timestamp
    symbol: str | None = None
    underlying: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "strike", to_decimal(self.strike))
        object.__setattr__(self, "right", normalize_option_right(self.right))
        object.__setattr__(self, "expiry", pd.Timestamp(self.expiry))
        if not self.strike > 0:
            raise ValueError("strike must be > 0")

    @classmethod
    def from_occ_symbol(cls, symbol: str) -> OptionContract:
        """Build a contract from an OCC symbol such as ``SPY   240621C00500000``.

        The expiry is the expiration date at midnight (naive), so
        `time_to_expiration` is already negative during the expiration
        session and the kernel returns the at-expiry boundary delta all day.
        Construct the contract with an explicit `expiry` (e.g. the 16:00
        close) to keep a time value until the session ends.
        """
        match = _OCC_SYMBOL.match(symbol.strip().upper())
        if match is None:
            raise ValueError(f"Not a valid OCC option symbol: {symbol!r}")

        expiry = datetime.strptime(match["expiry"], "%y%m%d")
        return cls(
            strike=Decimal(int(match["strike"])) / Decimal(1000),
            right=normalize_option_right(match["right"]),
            expiry=pd.Timestamp(expiry),
            symbol=symbol.strip(),
            underlying=match["root"],
        )


@dataclass(frozen=True)
class MarketSnapshot:
    """Market/model inputs for one Greek evaluation.

    Units: annualized decimals for volatility, rate and dividend yield
    (0.05 = 5%). Inputs are converted to `Decimal`; they are not range checked.
    """

    underlying_price: Decimal
    implied_volatility: Decimal
    risk_free_rate: Decimal = Decimal("0.05")
    dividend_yield: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        for name in (
            "underlying_price",
            "implied_volatility",
            "risk_free_rate",
            "dividend_yield",
        ):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
