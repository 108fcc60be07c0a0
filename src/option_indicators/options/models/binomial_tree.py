"""CRR binomial-tree pricing for vanilla options."""

from __future__ import annotations

import logging
from decimal import Decimal

import numpy as np

from option_indicators.options.decimal_math import to_decimal
from option_indicators.options.types import (
    OptionRight,
    OptionRightInput,
    normalize_option_right,
)

logger = logging.getLogger(__name__)

# Number of time steps used by the Greek indicators' lattice.
LATTICE_STEPS = 200


def _intrinsic_value(
    spot: np.ndarray | float, strike: float, right: OptionRight
) -> np.ndarray:
    if right == OptionRight.CALL:
        return np.maximum(np.asarray(spot, dtype=float) - strike, 0.0)
    return np.maximum(strike - np.asarray(spot, dtype=float), 0.0)


def _node_spots(S: float, log_u: float, step: int) -> np.ndarray:
    j = np.arange(step + 1)
    return S * np.exp((2 * j - step) * log_u)


def binomial_tree_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionRightInput = OptionRight.CALL,
    steps: int = LATTICE_STEPS,
    american: bool = True,
) -> float:
    """Price a vanilla option with a Cox-Ross-Rubinstein tree.

    Args:
        S: Spot price.
        K: Strike price.
        T: Time to expiry in years.
        sigma: Annualized volatility in decimals.
        r: Continuously-compounded risk-free rate.
        q: Continuously-compounded dividend yield.
        option_type: One of `{'call', 'put', 'C', 'P'}`.
        steps: Number of binomial time steps.
        american: If True, allow early exercise at each node.

    Returns:
        Present value for one option.

    Raises:
        ValueError: If `steps < 1` or if `T < 0`.
    """
    if steps < 1:
        raise ValueError("steps must be >= 1")
    if T < 0:
        raise ValueError("T must be non-negative")

    right = normalize_option_right(option_type)
    if T == 0:
        return float(_intrinsic_value(S, K, right))

    dt = T / steps
    disc = np.exp(-r * dt)

    # Deterministic evolution when volatility is zero.
    if sigma <= 0:
        times = np.arange(steps + 1) * dt
        spots = S * np.exp((r - q) * times)
        intrinsic = _intrinsic_value(spots, K, right)

        if american:
            discounted = np.exp(-r * times) * intrinsic
            return float(discounted.max())

        return float(np.exp(-r * T) * intrinsic[-1])

    log_u = sigma * np.sqrt(dt)
    u = np.exp(log_u)
    d = 1.0 / u

    growth = np.exp((r - q) * dt)
    p = (growth - d) / (u - d)

    if not 0.0 <= p <= 1.0:
        logger.warning(
            "CRR risk-neutral probability %.6f outside [0, 1] "
            "(sigma=%s, T=%s, steps=%d); clipping",
            p,
            sigma,
            T,
            steps,
        )
        p = min(max(p, 0.0), 1.0)

    # S * u**j * d**(n - j) in log space; only the outermost nodes can overflow.
    with np.errstate(over="ignore"):
        spots_T = _node_spots(S, log_u, steps)
    option_vals = _intrinsic_value(spots_T, K, right)

    for step in range(steps - 1, -1, -1):
        option_vals = disc * (p * option_vals[1:] + (1.0 - p) * option_vals[:-1])
        if not american:
            continue

        with np.errstate(over="ignore"):
            spots = _node_spots(S, log_u, step)
        intrinsic = _intrinsic_value(spots, K, right)
        option_vals = np.maximum(option_vals, intrinsic)

    return float(option_vals[0])


def crr_theoretical_price(
    sigma: Decimal,
    S: Decimal,
    K: Decimal,
    T: Decimal,
    r: Decimal,
    q: Decimal,
    right: OptionRightInput,
    steps: int = LATTICE_STEPS,
) -> Decimal:
    """American CRR price with Decimal inputs and output."""
    price = binomial_tree_price(
        S=float(S),
        K=float(K),
        T=float(T),
        sigma=float(sigma),
        r=float(r),
        q=float(q),
        option_type=right,
        steps=steps,
        american=True,
    )
    return to_decimal(price)
