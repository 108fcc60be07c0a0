"""Logging configuration for the app entrypoints.

Library modules never configure handlers; they only do
``logger = logging.getLogger(__name__)``. Entrypoints call `setup_logging`
once.

The console handler injects ``record.shortname`` (last dotted component of the
logger name), so console formats may use ``%(shortname)s``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping


class _AddShortNameFilter(logging.Filter):
    """Inject `record.shortname` without touching `record.name`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.split(".")[-1]
        return True


class _ColorFormatter(logging.Formatter):
    """Colors the levelname only; used for the console handler."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if not color:
            return super().format(record)

        original = record.levelname
        record.levelname = f"{color}{original}{self._RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _coerce_level(level: int | str) -> int:
    """Coerce a logging level given as int or string into an int."""
    if isinstance(level, int):
        return level

    s = str(level).strip().upper()
    if not s:
        raise ValueError("Empty logging level")
    if s.isdigit():
        return int(s)

    value = logging.getLevelName(s)
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return value


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    fmt_file: str = "%(asctime)s %(levelname)s %(name)s - %(message)s",
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
    capture_warnings: bool = True,
) -> None:
    """Configure root logging.

    Parameters
    - level: Root log level (int or string).
    - fmt_console / fmt_file: Console and file formats.
    - log_file: If provided, also write logs to this file (uncolored).
    - module_levels: Per-logger overrides, e.g.
      ``{"option_indicators.options.greeks": "DEBUG"}``.
    - colored: ANSI-colored console levelnames.
    - capture_warnings: Route `warnings` (numpy overflow/invalid-value
      RuntimeWarnings from degenerate pricing inputs) to the ``py.warnings``
      logger.

    Uses ``force=True`` so repeated calls do not duplicate handlers.
    """
    root_level = _coerce_level(level)
    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.addFilter(_AddShortNameFilter())
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    console.setFormatter(formatter_cls(fmt=fmt_console, datefmt=datefmt))
    handlers.append(console)

    if log_file is not None:
        p = Path(log_file)
        p.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(p, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt=fmt_file, datefmt=datefmt))
        handlers.append(fh)

    logging.basicConfig(level=root_level, handlers=handlers, force=True)

    if module_levels:
        for name, lvl in module_levels.items():
            logging.getLogger(name).setLevel(_coerce_level(lvl))

    logging.captureWarnings(capture_warnings)
