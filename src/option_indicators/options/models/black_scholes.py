"""Black-Scholes helpers for European options with continuous dividend yield."""

from __future__ import annotations

from decimal import Decimal

import numpy as np
from scipy.stats import norm

from option_indicators.options.decimal_math import dlog, dsqrt
from option_indicators.options.types import (
    OptionRight,
    OptionRightInput,
    normalize_option_right,
)


def bs_d1(
    S: Decimal,
    K: Decimal,
    T: Decimal,
    r: Decimal,
    q: Decimal,
    sigma: Decimal,
) -> Decimal:
    """Compute Black-Scholes d1 in Decimal.

    When ``sigma * sqrt(T)`` is zero (no volatility or no time left), d1 is the
    signed limit: ``+/-Infinity`` following the sign of the numerator, and 0
    when the numerator is 0 as well.
    """
    numerator = dlog(S / K) + (r - q + Decimal("0.5") * sigma * sigma) * T
    denominator = sigma * dsqrt(T)
    if denominator == 0:
        if numerator == 0:
            return Decimal(0)
        return Decimal("Infinity").copy_sign(numerator)
    return numerator / denominator


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionRightInput = OptionRight.CALL,
) -> float:
    """Black-Scholes price with continuous dividend yield (float reference)."""
    if T <= 0 or sigma <= 0:
        raise ValueError("T and sigma must be positive")
    right = normalize_option_right(option_type)
    d1 = (np.log(S / K) + (r - q + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))
    d2 = d1 - sigma * np.sqrt(T)

    if right == OptionRight.CALL:
        return float(
            S * np.exp(-q * T) * norm.cdf(d1) - K * np.exp(-r * T) * norm.cdf(d2)
        )
    return float(
        K * np.exp(-r * T) * norm.cdf(-d2) - S * np.exp(-q * T) * norm.cdf(-d1)
    )
