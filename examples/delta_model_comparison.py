"""Compare Black-Scholes and CRR binomial Delta along a price path.

Builds one call and one put on the same strike, feeds both indicators the
same snapshots, and prints a small table with the model gap.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pandas as pd

from option_indicators import Delta, GreekIndicatorConfig, OptionContract, PricingModel
from option_indicators.rates import SeriesRateModel
from option_indicators.utils import setup_logging

SYMBOLS = ["SPY   250620C00560000", "SPY   250620P00560000"]
RATES = SeriesRateModel(
    pd.Series([0.0435, 0.0430], index=pd.to_datetime(["2025-01-02", "2025-03-03"]))
)
PATH = pd.DataFrame(
    {
        "time": pd.date_range("2025-03-10 15:30", periods=5, freq="D"),
        "underlying_price": ["560.10", "555.42", "562.81", "571.03", "566.50"],
        "implied_volatility": ["0.182", "0.195", "0.1875", "0.171", "0.176"],
    }
)


def main() -> None:
    setup_logging("INFO", colored=True)
    logger = logging.getLogger(__name__)

    rows = []
    for symbol in SYMBOLS:
        option = OptionContract.from_occ_symbol(symbol)
        indicators = {
            model: Delta(
                GreekIndicatorConfig(
                    option=option,
                    risk_free_rate=RATES,
                    dividend_yield=Decimal("0.0125"),
                    option_model=model,
                )
            )
            for model in PricingModel
        }
        for row in PATH.itertuples(index=False):
            values = {
                model: ind.update(row.time, row.underlying_price, row.implied_volatility)
                for model, ind in indicators.items()
            }
            bs = values[PricingModel.BLACK_SCHOLES]
            crr = values[PricingModel.BINOMIAL_CRR]
            rows.append(
                {
                    "symbol": symbol,
                    "time": row.time,
                    "spot": row.underlying_price,
                    "bs_delta": round(bs, 4),
                    "crr_delta": round(crr, 4),
                    "gap": round(crr - bs, 5),
                }
            )

    table = pd.DataFrame(rows)
    logger.info("Evaluated %d snapshots", len(table))
    print(table.to_string(index=False))


if __name__ == "__main__":
    main()
