"""
clprompter exception classes.

This package provides all exception types used throughout clprompter for
consistent error handling and reporting.
"""

from clprompter.exceptions.core import (
    CLPrompterError,
    CLSyntaxError,
    ErrorContext,
    LayoutConfigError,
    LexError,
    ParseError,
    SchemaError,
)

__all__ = [
    "CLPrompterError",
    "CLSyntaxError",
    "ErrorContext",
    "LayoutConfigError",
    "LexError",
    "ParseError",
    "SchemaError",
]
