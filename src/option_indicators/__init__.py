"""Option Greek indicators under Black-Scholes and CRR binomial models."""

from .indicators import Delta, GreekIndicatorConfig, OptionGreeksIndicatorBase
from .options import (
    MarketSnapshot,
    OptionContract,
    OptionRight,
    PricingModel,
    theoretical_delta,
    time_to_expiration,
)
from .rates import ConstantRateModel, RateModel, SeriesRateModel, coerce_rate_model

__all__ = [
    "Delta",
    "GreekIndicatorConfig",
    "OptionGreeksIndicatorBase",
    "MarketSnapshot",
    "OptionContract",
    "OptionRight",
    "PricingModel",
    "theoretical_delta",
    "time_to_expiration",
    "RateModel",
    "ConstantRateModel",
    "SeriesRateModel",
    "coerce_rate_model",
]
