"""
clprompter - text engine for prompting and formatting IBM i CL commands

clprompter parses CL command text into a command tree, decomposes parameter
values into form-shaped structures, rebuilds command text from edited values
and reflows commands into column-aligned source lines.
"""

from importlib.metadata import version

from clprompter.layout import LayoutConfig, ReflowFormatter, format_command, reflow
from clprompter.parsing import CommandNode, parse_command
from clprompter.structure import (
    ParameterSchema,
    build_command,
    decompose_command,
    quote_if_needed,
)

__version__ = version("clprompter")

__all__ = [
    "__version__",
    "CommandNode",
    "LayoutConfig",
    "ParameterSchema",
    "ReflowFormatter",
    "build_command",
    "decompose_command",
    "format_command",
    "parse_command",
    "quote_if_needed",
    "reflow",
]
