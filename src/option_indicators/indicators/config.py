"""Construction-time configuration for option Greek indicators."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from option_indicators.options.types import (
    OptionContract,
    PricingModel,
    normalize_pricing_model,
)
from option_indicators.rates import (
    DEFAULT_DIVIDEND_YIELD,
    DEFAULT_RISK_FREE_RATE,
    RateInput,
    RateModel,
    coerce_rate_model,
)


@dataclass(frozen=True)
class GreekIndicatorConfig:
    """Binds an indicator to a contract, rate sources and pricing models.

    `risk_free_rate` and `dividend_yield` each take either a constant or a
    `RateModel` (series and ``{date: rate}`` mappings are wrapped); after
    construction both fields hold a `RateModel`. `iv_model` mirrors
    `option_model` when unset.
    """

    option: OptionContract
    name: str | None = None
    risk_free_rate: RateInput = DEFAULT_RISK_FREE_RATE
    dividend_yield: RateInput = DEFAULT_DIVIDEND_YIELD
    option_model: PricingModel | str = PricingModel.BLACK_SCHOLES
    iv_model: PricingModel | str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.option, OptionContract):
            raise TypeError("option must be an OptionContract")
        object.__setattr__(
            self, "risk_free_rate", coerce_rate_model(self.risk_free_rate)
        )
        object.__setattr__(
            self, "dividend_yield", coerce_rate_model(self.dividend_yield)
        )

        option_model = normalize_pricing_model(self.option_model)
        object.__setattr__(self, "option_model", option_model)
        iv_model = (
            option_model
            if self.iv_model is None
            else normalize_pricing_model(self.iv_model)
        )
        object.__setattr__(self, "iv_model", iv_model)

    @property
    def risk_free_rate_model(self) -> RateModel:
        return self.risk_free_rate  # type: ignore[return-value]

    @property
    def dividend_yield_model(self) -> RateModel:
        return self.dividend_yield  # type: ignore[return-value]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GreekIndicatorConfig:
        """Build a config from a plain mapping (YAML/CLI).

        The option is given either as ``option.symbol`` (OCC) or as explicit
        ``strike``/``right``/``expiry`` keys.
        """
        option_cfg = data.get("option") or {}
        if option_cfg.get("strike") is not None:
            missing = [k for k in ("right", "expiry") if option_cfg.get(k) is None]
            if missing:
                raise ValueError(f"option is missing required keys: {missing}")
            option = OptionContract(
                strike=option_cfg["strike"],
                right=option_cfg["right"],
                expiry=option_cfg["expiry"],
                symbol=option_cfg.get("symbol"),
                underlying=option_cfg.get("underlying"),
            )
        elif option_cfg.get("symbol"):
            option = OptionContract.from_occ_symbol(option_cfg["symbol"])
        else:
            raise ValueError("option.symbol or option.strike/right/expiry must be set.")

        kwargs: dict[str, Any] = {"option": option}
        for key in (
            "name",
            "risk_free_rate",
            "dividend_yield",
            "option_model",
            "iv_model",
        ):
            if data.get(key) is not None:
                kwargs[key] = data[key]
        return cls(**kwargs)
