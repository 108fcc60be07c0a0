"""Option contract types, pricing helpers, and the Greek kernel."""

from .decimal_math import decimal_math, dexp, dlog, dnorm_cdf, dsqrt, to_decimal
from .greeks import (
    black_scholes_delta,
    crr_delta,
    theoretical_delta,
    time_to_expiration,
)
from .models import (
    LATTICE_STEPS,
    binomial_tree_price,
    bs_d1,
    bs_price,
    crr_theoretical_price,
)
from .types import (
    MarketSnapshot,
    OptionContract,
    OptionRight,
    OptionRightInput,
    PricingModel,
    align_timestamp,
    normalize_option_right,
    normalize_pricing_model,
)

__all__ = [
    "OptionRight",
    "OptionRightInput",
    "PricingModel",
    "OptionContract",
    "MarketSnapshot",
    "align_timestamp",
    "normalize_option_right",
    "normalize_pricing_model",
    "to_decimal",
    "decimal_math",
    "dexp",
    "dsqrt",
    "dlog",
    "dnorm_cdf",
    "LATTICE_STEPS",
    "binomial_tree_price",
    "crr_theoretical_price",
    "bs_d1",
    "bs_price",
    "time_to_expiration",
    "black_scholes_delta",
    "crr_delta",
    "theoretical_delta",
]
