"""
Character-class predicates for CL source text.

This module centralizes the small lexical vocabulary of the command language
(names, variables, numerics, hexadecimal literals) so the lexer, the parser and
the quoting policy classify text the same way.
"""

NAME_START_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ$#@")
NAME_CHARS = NAME_START_CHARS | frozenset("0123456789_")
DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789ABCDEF")

# Longest simple object name accepted by the system
MAX_NAME_LENGTH = 10

# Symbolic libraries accepted in front of a qualified command name
SPECIAL_LIBRARIES = frozenset({"*LIBL", "*CURLIB", "*NLVLIBL", "*SYSTEM"})


def is_letter(ch: str) -> bool:
    """Check if a character is an ASCII letter."""
    return len(ch) == 1 and ch.isascii() and ch.isalpha()


def is_name_start(ch: str) -> bool:
    """Check if a character may start a CL name."""
    return len(ch) == 1 and ch.upper() in NAME_START_CHARS


def is_name_char(ch: str) -> bool:
    """Check if a character may continue a CL name."""
    return len(ch) == 1 and ch.upper() in NAME_CHARS


def is_name_shape(text: str) -> bool:
    """
    Check if text has the shape of a bare CL name, ignoring length limits.

    Params:
        text: Candidate text

    Returns:
        True when text starts with a letter or $#@ and continues with name characters
    """
    if not text or not is_name_start(text[0]):
        return False
    return all(is_name_char(ch) for ch in text[1:])


def is_cl_name(text: str, max_length: int = MAX_NAME_LENGTH) -> bool:
    """Check if text is a bare CL name no longer than max_length."""
    return len(text) <= max_length and is_name_shape(text)


def is_command_name(text: str) -> bool:
    """
    Check if text has the shape of a command name (NAME or LIB/NAME).

    The library part may also be one of the symbolic libraries (*LIBL, *CURLIB).

    Params:
        text: Candidate command text

    Returns:
        True when text is NAME or LIB/NAME shaped
    """
    if "/" not in text:
        return is_name_shape(text)
    library, _, name = text.partition("/")
    if not is_name_shape(name):
        return False
    return is_name_shape(library) or library.upper() in SPECIAL_LIBRARIES


def is_qualified_name(text: str) -> bool:
    """Check if text is exactly LIB/NAME where both parts use name characters."""
    library, sep, name = text.partition("/")
    if not sep or not library or not name:
        return False
    return all(is_name_char(ch) for ch in library) and all(
        is_name_char(ch) for ch in name
    )


def is_variable(text: str, max_length: int = MAX_NAME_LENGTH) -> bool:
    """
    Check if text is a CL variable reference such as &COUNT.

    Params:
        text: Candidate text including the & sigil
        max_length: Maximum characters allowed after the sigil

    Returns:
        True for & followed by a letter and up to max_length name characters in total
    """
    if len(text) < 2 or text[0] != "&" or not is_letter(text[1]):
        return False
    body = text[1:]
    return len(body) <= max_length and all(is_name_char(ch) for ch in body)


def is_numeric_literal(text: str) -> bool:
    """Check if text is a plain decimal literal such as 42, -7 or 3.25."""
    if text[:1] in ("-", "+"):
        text = text[1:]
    whole, dot, fraction = text.partition(".")
    if not whole or any(ch not in DIGITS for ch in whole):
        return False
    if dot:
        return bool(fraction) and all(ch in DIGITS for ch in fraction)
    return True


def is_hex_literal(text: str) -> bool:
    """Check if text is a hexadecimal literal such as X'F0F1'."""
    if len(text) < 3 or text[0] not in "xX" or text[1] != "'" or text[-1] != "'":
        return False
    return all(ch.upper() in HEX_DIGITS for ch in text[2:-1])
