"""Option Delta indicator."""

from __future__ import annotations

from decimal import Decimal

import pandas as pd

from option_indicators.indicators.base import OptionGreeksIndicatorBase
from option_indicators.indicators.config import GreekIndicatorConfig
from option_indicators.options.greeks import theoretical_delta, time_to_expiration
from option_indicators.options.models.binomial_tree import LATTICE_STEPS
from option_indicators.options.types import MarketSnapshot


class Delta(OptionGreeksIndicatorBase):
    """Sensitivity of the option price to a 1.0 move in the underlying."""

    greek_name = "Delta"

    def __init__(self, config: GreekIndicatorConfig, steps: int = LATTICE_STEPS) -> None:
        if steps < 1:
            raise ValueError("steps must be >= 1")
        super().__init__(config)
        self.steps = steps

    def calculate_greek(
        self, time: pd.Timestamp, snapshot: MarketSnapshot
    ) -> Decimal:
        time_to_expiry = time_to_expiration(self.option.expiry, time)
        return theoretical_delta(
            self.option,
            snapshot,
            time_to_expiry,
            model=self.option_model,
            steps=self.steps,
        )
