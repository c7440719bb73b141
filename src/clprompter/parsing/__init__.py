"""
CL command parsing components.

This package provides the lexer, the structural parser and the command tree
node types, plus helpers for labels, comments and positional parameters.
"""

from clprompter.parsing.lexer import Token, TokenType, tokenize, validate_tokens
from clprompter.parsing.nodes import (
    CommandNode,
    Expression,
    Group,
    Nested,
    Parameter,
    Scalar,
    Value,
    render_value,
)
from clprompter.parsing.parser import CommandParser, parse_command, parse_tokens
from clprompter.parsing.positional import name_positional_parameters
from clprompter.parsing.source import (
    extract_comment,
    extract_keyword_argument,
    split_label,
)

__all__ = [
    "CommandNode",
    "CommandParser",
    "Expression",
    "Group",
    "Nested",
    "Parameter",
    "Scalar",
    "Token",
    "TokenType",
    "Value",
    "extract_comment",
    "extract_keyword_argument",
    "name_positional_parameters",
    "parse_command",
    "parse_tokens",
    "render_value",
    "split_label",
    "tokenize",
    "validate_tokens",
]
