"""
Layout components.

This package provides the layout configuration model and the reflow formatter
that writes commands as column-aligned source lines with continuations.
"""

from clprompter.layout.case import convert_case
from clprompter.layout.config import LayoutConfig
from clprompter.layout.formatter import (
    LONG_STRING_THRESHOLD,
    ReflowFormatter,
    format_command,
    reflow,
)
from clprompter.layout.units import command_units

__all__ = [
    "LONG_STRING_THRESHOLD",
    "LayoutConfig",
    "ReflowFormatter",
    "command_units",
    "convert_case",
    "format_command",
    "reflow",
]
