"""Decimal-safe wrappers around float elementary functions.

Pricing inputs and outputs are `Decimal`; transcendental functions are
evaluated in double precision (numpy/scipy) and converted back through the
shortest round-trip repr, so ``decimal_math(np.exp, Decimal(0))`` is exactly
``Decimal("1.0")``. Non-finite floats map to Decimal NaN/Infinity.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from numbers import Real

import numpy as np
from scipy.stats import norm


def to_decimal(value: Decimal | Real | str) -> Decimal:
    """Convert a scalar to `Decimal` without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a valid numeric input")
    if isinstance(value, int | np.integer):
        return Decimal(int(value))
    if isinstance(value, Real):
        return Decimal(repr(float(value)))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a decimal number: {value!r}") from exc
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def decimal_math(func: Callable[[float], float], value: Decimal) -> Decimal:
    """Apply a float function to a Decimal and return a Decimal."""
    return Decimal(repr(float(func(float(value)))))


def dexp(value: Decimal) -> Decimal:
    return decimal_math(np.exp, value)


def dsqrt(value: Decimal) -> Decimal:
    return decimal_math(np.sqrt, value)


def dlog(value: Decimal) -> Decimal:
    return decimal_math(np.log, value)


def dnorm_cdf(value: Decimal) -> Decimal:
    """Standard normal CDF."""
    return decimal_math(norm.cdf, value)
