"""Lifecycle shared by option Greek indicators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

import pandas as pd

from option_indicators.indicators.config import GreekIndicatorConfig
from option_indicators.options.decimal_math import to_decimal
from option_indicators.options.types import MarketSnapshot, OptionContract, PricingModel

logger = logging.getLogger(__name__)


class OptionGreeksIndicatorBase(ABC):
    """Refreshes the market snapshot and delegates to `calculate_greek`.

    Instances are not synchronized; callers serialize `update` per instance.
    """

    greek_name: str = "Greek"

    def __init__(self, config: GreekIndicatorConfig) -> None:
        self.config = config
        self.name = config.name or f"{self.greek_name}({config.option_model})"
        self.current: Decimal = Decimal(0)
        self.snapshot: MarketSnapshot | None = None
        self.samples = 0

    @property
    def option(self) -> OptionContract:
        return self.config.option

    @property
    def option_model(self) -> PricingModel:
        return self.config.option_model  # type: ignore[return-value]

    @property
    def iv_model(self) -> PricingModel:
        return self.config.iv_model  # type: ignore[return-value]

    @property
    def is_ready(self) -> bool:
        return self.samples > 0

    def update(
        self,
        time: datetime | pd.Timestamp,
        underlying_price: Decimal | float | str,
        implied_volatility: Decimal | float | str,
    ) -> Decimal:
        """Evaluate the Greek at `time` and store it as the current value."""
        as_of = pd.Timestamp(time)
        snapshot = MarketSnapshot(
            underlying_price=to_decimal(underlying_price),
            implied_volatility=to_decimal(implied_volatility),
            risk_free_rate=self.config.risk_free_rate_model.annual_rate(as_of),
            dividend_yield=self.config.dividend_yield_model.annual_rate(as_of),
        )
        value = self.calculate_greek(as_of, snapshot)

        self.snapshot = snapshot
        self.current = value
        self.samples += 1
        logger.debug("%s @ %s -> %s", self.name, as_of, value)
        return value

    def reset(self) -> None:
        self.current = Decimal(0)
        self.snapshot = None
        self.samples = 0

    @abstractmethod
    def calculate_greek(
        self, time: pd.Timestamp, snapshot: MarketSnapshot
    ) -> Decimal:
        """Return the Greek for `snapshot` evaluated at `time`."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, current={self.current})"
