"""Option Greek indicators."""

from .base import OptionGreeksIndicatorBase
from .config import GreekIndicatorConfig
from .delta import Delta

__all__ = [
    "OptionGreeksIndicatorBase",
    "GreekIndicatorConfig",
    "Delta",
]
