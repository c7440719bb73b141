"""
Core clprompter components.

This package provides the shared scan state machine, CL name predicates and
type definitions used by the parsing, structure and layout packages.
"""

from clprompter.core.names import (
    MAX_NAME_LENGTH,
    SPECIAL_LIBRARIES,
    is_cl_name,
    is_command_name,
    is_hex_literal,
    is_numeric_literal,
    is_qualified_name,
    is_variable,
)
from clprompter.core.scan import (
    CharRole,
    ScanState,
    ScanStep,
    find_matching_paren,
    find_unquoted,
    is_in_quote,
    scan,
    split_top_level,
    split_unquoted,
    strip_outer_parens,
)
from clprompter.core.types import DefaultsMap, FormValue, FormValues

__all__ = [
    "CharRole",
    "ScanState",
    "ScanStep",
    "scan",
    "is_in_quote",
    "find_matching_paren",
    "find_unquoted",
    "split_top_level",
    "split_unquoted",
    "strip_outer_parens",
    "MAX_NAME_LENGTH",
    "SPECIAL_LIBRARIES",
    "is_cl_name",
    "is_command_name",
    "is_hex_literal",
    "is_numeric_literal",
    "is_qualified_name",
    "is_variable",
    "DefaultsMap",
    "FormValue",
    "FormValues",
]
