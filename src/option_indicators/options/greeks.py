"""Delta evaluation kernel for Black-Scholes and CRR binomial models.

Every function here is a pure function of its arguments: no I/O and no state
between calls, so evaluations on independent snapshots can run concurrently.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, DivisionByZero, InvalidOperation, localcontext

import pandas as pd

from option_indicators.options.decimal_math import dexp, dnorm_cdf, dsqrt
from option_indicators.options.models.binomial_tree import (
    LATTICE_STEPS,
    crr_theoretical_price,
)
from option_indicators.options.models.black_scholes import bs_d1
from option_indicators.options.types import (
    MarketSnapshot,
    OptionContract,
    OptionRight,
    PricingModel,
    align_timestamp,
)

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = Decimal(365)
# Up factor used when the lattice step has no volatility-scaled move.
MIN_UP_FACTOR = Decimal("1.00001")

_NANOS_PER_DAY = Decimal(86_400 * 10**9)


def time_to_expiration(
    expiry: datetime | pd.Timestamp,
    now: datetime | pd.Timestamp,
) -> Decimal:
    """Year fraction ``(expiry - now).total_days / 365`` in exact Decimal.

    Negative once `now` is past `expiry`. When only one side carries a time
    zone, `now` is aligned to the expiry with `align_timestamp`.
    """
    expiry_ts = pd.Timestamp(expiry)
    elapsed = expiry_ts - align_timestamp(now, expiry_ts)
    return Decimal(elapsed.value) / _NANOS_PER_DAY / DAYS_PER_YEAR


def black_scholes_delta(
    contract: OptionContract,
    snapshot: MarketSnapshot,
    time_to_expiry: Decimal,
) -> Decimal:
    """Closed-form Black-Scholes delta with continuous dividend yield."""
    d1 = bs_d1(
        snapshot.underlying_price,
        contract.strike,
        time_to_expiry,
        snapshot.risk_free_rate,
        snapshot.dividend_yield,
        snapshot.implied_volatility,
    )

    if contract.right == OptionRight.CALL:
        whole_share_delta = dnorm_cdf(d1)
    else:
        whole_share_delta = -dnorm_cdf(-d1)

    return whole_share_delta * dexp(-snapshot.dividend_yield * time_to_expiry)


def crr_delta(
    contract: OptionContract,
    snapshot: MarketSnapshot,
    time_to_expiry: Decimal,
    steps: int = LATTICE_STEPS,
) -> Decimal:
    """Central finite-difference delta of the CRR lattice price.

    The underlying is bumped up and down by one lattice step's move,
    ``u = exp(sigma * sqrt(T / steps))``, and both bumped contracts are
    repriced on the tree.
    """
    sigma = snapshot.implied_volatility
    up_factor = dexp(sigma * dsqrt(time_to_expiry / steps))
    if up_factor == 1:
        # zero vol or zero time: Su == Sd otherwise
        up_factor = MIN_UP_FACTOR

    spot_up = snapshot.underlying_price * up_factor
    spot_down = snapshot.underlying_price / up_factor

    price_up = crr_theoretical_price(
        sigma,
        spot_up,
        contract.strike,
        time_to_expiry,
        snapshot.risk_free_rate,
        snapshot.dividend_yield,
        contract.right,
        steps=steps,
    )
    price_down = crr_theoretical_price(
        sigma,
        spot_down,
        contract.strike,
        time_to_expiry,
        snapshot.risk_free_rate,
        snapshot.dividend_yield,
        contract.right,
        steps=steps,
    )

    with localcontext() as ctx:
        # degenerate spots give NaN/Infinity instead of raising
        ctx.traps[InvalidOperation] = False
        ctx.traps[DivisionByZero] = False
        return (price_up - price_down) / (spot_up - spot_down)


def theoretical_delta(
    contract: OptionContract,
    snapshot: MarketSnapshot,
    time_to_expiry: Decimal,
    model: PricingModel = PricingModel.BLACK_SCHOLES,
    steps: int = LATTICE_STEPS,
) -> Decimal:
    """Dispatch to the delta formula of `model`.

    Anything other than the binomial model is priced with Black-Scholes.
    Expired contracts (``time_to_expiry < 0``) are evaluated at expiry, which
    yields the boundary delta for the current moneyness.
    """
    if time_to_expiry < 0:
        logger.debug(
            "Contract %s evaluated %s years past expiry; using T=0",
            contract.symbol or contract.strike,
            -time_to_expiry,
        )
        time_to_expiry = Decimal(0)

    if model == PricingModel.BINOMIAL_CRR:
        return crr_delta(contract, snapshot, time_to_expiry, steps=steps)
    return black_scholes_delta(contract, snapshot, time_to_expiry)
