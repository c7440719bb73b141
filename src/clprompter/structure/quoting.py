"""
Literal quoting policy.

Decides whether a scalar leaf value is emitted as-is or wrapped in single
quotes. The rules are evaluated in order and the first match wins; see
quote_if_needed for the list.
"""

from collections.abc import Iterable

from clprompter.core.names import (
    NAME_CHARS,
    is_cl_name,
    is_hex_literal,
    is_name_start,
    is_numeric_literal,
    is_qualified_name,
    is_variable,
)
from clprompter.core.scan import literal_end
from clprompter.parsing.lexer import TokenType, tokenize
from clprompter.structure.schema import COMMAND_TYPES, NAME_TYPES


def is_quoted_string(text: str) -> bool:
    """Check if text is one complete single-quoted literal, inner quotes doubled."""
    if len(text) < 2 or text[0] != "'" or text[-1] != "'":
        return False
    end, terminated = literal_end(text, 0)
    return terminated and end == len(text)


def is_valid_name(text: str) -> bool:
    """
    Check if text is acceptable as the value of a NAME-family parameter.

    Besides plain names this accepts names containing periods, variable
    references and already-quoted strings.
    """
    trimmed = text.strip()
    if trimmed.startswith("&"):
        return _is_dotted_name(trimmed[1:])
    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in ("'", '"'):
        return True
    return _is_dotted_name(trimmed)


def _is_dotted_name(text: str) -> bool:
    if not text or len(text) > 11 or not is_name_start(text[0]):
        return False
    return all(ch.upper() in NAME_CHARS or ch == "." for ch in text[1:])


def is_cl_expression(text: str) -> bool:
    """
    Check if text is a CL expression that must be emitted verbatim.

    Expressions are parenthesized text, text using a symbolic operator such as
    *CAT or *EQ, a built-in function call such as %SST(...), or a variable
    next to an operator (&X + 1).
    """
    trimmed = text.strip()
    if trimmed.startswith("(") and trimmed.endswith(")"):
        return True

    tokens = [t for t in tokenize(trimmed) if not t.is_space]
    for i, token in enumerate(tokens):
        nxt = tokens[i + 1] if i + 1 < len(tokens) else None
        prev = tokens[i - 1] if i > 0 else None

        if token.type == TokenType.OPERATOR and len(token.text) > 1:
            if token.text.startswith("*"):
                return True
        if token.type == TokenType.FUNCTION and nxt is not None:
            if nxt.type == TokenType.PAREN_OPEN:
                return True
        if token.type == TokenType.VARIABLE:
            for neighbour in (prev, nxt):
                if neighbour is not None and neighbour.type in (
                    TokenType.OPERATOR,
                    TokenType.FUNCTION,
                ):
                    return True
    return False


def quote_if_needed(
    value: str,
    allowed_values: Iterable[str] = (),
    declared_type: str = "",
) -> str:
    """
    Apply CL quoting rules to one scalar value.

    Rules, first match wins:
     1. CMD/CMDSTR values are never quoted
     2. variable references (&NAME) stay bare
     3. hexadecimal literals (X'...') stay bare
     4. allowed special values, and anything starting with *, stay bare
     5. correctly quoted strings are returned unchanged
     6. double-quoted strings are returned unchanged
     7. library-qualified names (LIB/NAME) stay bare
     8. valid CL names stay bare
     9. NAME-family types accept any valid name form
    10. CL expressions are returned verbatim, untrimmed
    11. blank values and '' become the empty string
    12. numeric literals stay bare
    13. a quoted value with stray internal quotes is repaired
    14. anything else is quoted, doubling internal quotes

    Params:
        value: The value as edited
        allowed_values: Special values declared for the parameter
        declared_type: Declared data type (a leading * is ignored)

    Returns:
        Text ready to be placed in the command
    """
    trimmed = value.strip()
    type_name = declared_type.strip().upper().lstrip("*")

    if type_name in COMMAND_TYPES:
        return trimmed

    if is_variable(trimmed):
        return trimmed

    if is_hex_literal(trimmed):
        return trimmed

    upper = trimmed.upper()
    if trimmed.startswith("*") or any(v.upper() == upper for v in allowed_values):
        return trimmed

    if is_quoted_string(trimmed):
        return trimmed

    if len(trimmed) >= 2 and trimmed.startswith('"') and trimmed.endswith('"'):
        return trimmed

    if is_qualified_name(trimmed):
        return trimmed

    if is_cl_name(trimmed):
        return trimmed

    if type_name in NAME_TYPES and is_valid_name(trimmed):
        return trimmed

    if is_cl_expression(trimmed):
        return value

    if trimmed in ("", "''"):
        return ""

    if is_numeric_literal(trimmed):
        return trimmed

    if len(trimmed) >= 2 and trimmed.startswith("'") and trimmed.endswith("'"):
        inner = trimmed[1:-1].replace("'", "''")
        return f"'{inner}'"

    escaped = trimmed.replace("'", "''")
    return f"'{escaped}'"
