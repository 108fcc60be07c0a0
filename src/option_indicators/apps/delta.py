#!/usr/bin/env python
"""Compute option Delta for one market snapshot or a CSV time series."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import pandas as pd

from option_indicators.apps._cli import (
    add_dry_run_arg,
    add_print_config_arg,
    collect_logging_overrides,
    log_dry_run,
    print_config,
    print_result,
)
from option_indicators.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    resolve_path,
    setup_logging_from_config,
)
from option_indicators.indicators import Delta, GreekIndicatorConfig
from option_indicators.options.decimal_math import to_decimal
from option_indicators.options.models.binomial_tree import LATTICE_STEPS
from option_indicators.options.types import PricingModel
from option_indicators.rates import DEFAULT_DIVIDEND_YIELD, DEFAULT_RISK_FREE_RATE

SERIES_COLUMNS = ("time", "underlying_price", "implied_volatility")

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "name": None,
    "option": {
        "symbol": None,
        "strike": None,
        "right": None,
        "expiry": None,
    },
    "risk_free_rate": DEFAULT_RISK_FREE_RATE,
    "dividend_yield": DEFAULT_DIVIDEND_YIELD,
    "option_model": PricingModel.BLACK_SCHOLES.value,
    "iv_model": None,
    "steps": LATTICE_STEPS,
    "market": {
        "as_of": None,
        "underlying_price": None,
        "implied_volatility": None,
    },
    "paths": {
        "series_input": None,
        "series_output": None,
    },
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute option Delta (Black-Scholes or CRR binomial)."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)
    add_dry_run_arg(parser)

    parser.add_argument("--name", type=str, default=None)
    parser.add_argument("--symbol", type=str, default=None, help="OCC option symbol.")
    parser.add_argument("--strike", type=to_decimal, default=None)
    parser.add_argument("--right", type=str, default=None, help="call/put or C/P.")
    parser.add_argument("--expiry", type=str, default=None)
    parser.add_argument("--rate", type=to_decimal, default=None)
    parser.add_argument("--dividend-yield", type=to_decimal, default=None)
    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Pricing model for Delta (BlackScholes, BinomialCoxRossRubinstein).",
    )
    parser.add_argument("--iv-model", type=str, default=None)
    parser.add_argument("--steps", type=int, default=None)
    parser.add_argument("--as-of", type=str, default=None)
    parser.add_argument("--spot", type=to_decimal, default=None)
    parser.add_argument("--iv", type=to_decimal, default=None)
    parser.add_argument(
        "--series-input",
        type=str,
        default=None,
        help="CSV with columns time,underlying_price,implied_volatility.",
    )
    parser.add_argument(
        "--series-output",
        type=str,
        default=None,
        help="Output CSV path (stdout when omitted).",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    option: dict[str, Any] = {}
    market: dict[str, Any] = {}
    paths: dict[str, Any] = {}

    for key, value in (
        ("symbol", args.symbol),
        ("strike", args.strike),
        ("right", args.right),
        ("expiry", args.expiry),
    ):
        if value is not None:
            option[key] = value
    if option:
        overrides["option"] = option

    for key, value in (
        ("as_of", args.as_of),
        ("underlying_price", args.spot),
        ("implied_volatility", args.iv),
    ):
        if value is not None:
            market[key] = value
    if market:
        overrides["market"] = market

    if args.series_input:
        paths["series_input"] = args.series_input
    if args.series_output:
        paths["series_output"] = args.series_output
    if paths:
        overrides["paths"] = paths

    for key, value in (
        ("name", args.name),
        ("risk_free_rate", args.rate),
        ("dividend_yield", args.dividend_yield),
        ("option_model", args.model),
        ("iv_model", args.iv_model),
        ("steps", args.steps),
    ):
        if value is not None:
            overrides[key] = value

    if args.dry_run:
        overrides["dry_run"] = True

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def read_series(path: Path) -> pd.DataFrame:
    """Read a snapshot series CSV, keeping prices and vols as exact strings."""
    frame = pd.read_csv(
        path,
        dtype={"underlying_price": str, "implied_volatility": str},
    )
    missing = [c for c in SERIES_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"Series file {path} is missing columns: {missing}")
    frame["time"] = pd.to_datetime(frame["time"])
    return frame


def evaluate_series(indicator: Delta, frame: pd.DataFrame) -> pd.DataFrame:
    """Feed each row to `indicator` in time order and append a `delta` column."""
    ordered = frame.sort_values("time", kind="stable").reset_index(drop=True)
    deltas = [
        indicator.update(row.time, row.underlying_price, row.implied_volatility)
        for row in ordered.itertuples(index=False)
    ]
    out = ordered.copy()
    out["delta"] = [str(value) for value in deltas]
    return out


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print_config(config)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    indicator_config = GreekIndicatorConfig.from_mapping(config)
    indicator = Delta(indicator_config, steps=int(config.get("steps") or LATTICE_STEPS))
    dry_run = bool(config.get("dry_run", False))

    series_input = resolve_path(config["paths"].get("series_input"))
    series_output = resolve_path(config["paths"].get("series_output"))

    logger.info("Indicator:  %s", indicator.name)
    logger.info("Strike:     %s %s", indicator.option.strike, indicator.option.right)
    logger.info("Expiry:     %s", indicator.option.expiry)
    logger.info("IV model:   %s", indicator.iv_model)
    logger.info("Steps:      %s", indicator.steps)

    if series_input is not None:
        if dry_run:
            log_dry_run(
                logger,
                {
                    "action": "delta_series",
                    "name": indicator.name,
                    "series_input": series_input,
                    "series_output": series_output,
                },
            )
            return

        frame = read_series(series_input)
        result = evaluate_series(indicator, frame)
        logger.info("Evaluated %d rows from %s", len(result), series_input)
        if series_output is None:
            result.to_csv(sys.stdout, index=False)
        else:
            series_output.parent.mkdir(parents=True, exist_ok=True)
            result.to_csv(series_output, index=False)
            logger.info("Wrote %s", series_output)
        return

    market = config.get("market", {})
    missing = [
        key
        for key in ("underlying_price", "implied_volatility")
        if market.get(key) is None
    ]
    if missing:
        raise ValueError(f"market values must be set: {missing}")
    as_of = pd.Timestamp(market["as_of"]) if market.get("as_of") else pd.Timestamp.now()

    if dry_run:
        log_dry_run(
            logger,
            {
                "action": "delta",
                "name": indicator.name,
                "as_of": as_of,
                "underlying_price": market["underlying_price"],
                "implied_volatility": market["implied_volatility"],
            },
        )
        return

    value = indicator.update(
        as_of, market["underlying_price"], market["implied_volatility"]
    )
    print_result(
        {
            "name": indicator.name,
            "symbol": indicator.option.symbol,
            "as_of": as_of,
            "delta": value,
        }
    )


if __name__ == "__main__":
    main()
