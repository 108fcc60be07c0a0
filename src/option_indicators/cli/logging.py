from __future__ import annotations

from typing import Any, Mapping

from option_indicators.utils.logging_config import setup_logging


DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    "module_levels": {},
}


def add_logging_args(parser) -> None:
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (e.g., INFO, DEBUG).",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path.",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console log format string.",
    )
    parser.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    parser.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(
    config: Mapping[str, Any] | None
) -> dict[str, Any]:
    merged = dict(DEFAULT_LOGGING)
    merged["module_levels"] = {}
    if not config:
        return merged

    for key in ("level", "format", "file", "color"):
        if key in config and config[key] is not None:
            merged[key] = config[key]

    module_levels = config.get("module_levels")
    if module_levels:
        if not isinstance(module_levels, Mapping):
            raise ValueError("logging.module_levels must map logger names to levels.")
        merged["module_levels"] = {str(k): v for k, v in module_levels.items()}

    return merged


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        module_levels=log_cfg["module_levels"] or None,
        colored=log_cfg["color"],
    )
