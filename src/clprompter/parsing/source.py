"""
Input-side helpers for command source text.

These work on raw logical command text before lexing: peeling off a statement
label, separating a trailing comment, and pulling the raw argument text of a
single keyword. Quote and paren handling goes through clprompter.core.scan so
a "/*" or ":" inside a literal is never mistaken for syntax.
"""

from clprompter.core.names import is_cl_name, is_name_char
from clprompter.core.scan import (
    WHITESPACE,
    find_matching_paren,
    find_unquoted,
    scan,
)

COMMENT_START = "/*"
COMMENT_END = "*/"


def split_label(text: str) -> tuple[str | None, str]:
    """
    Separate a leading statement label from command text.

    Params:
        text: Command text, possibly starting with "LABEL:"

    Returns:
        (label or None, remaining command text with leading blanks removed)
    """
    stripped = text.lstrip()
    end = 0
    while end < len(stripped) and is_name_char(stripped[end]):
        end += 1

    if end < len(stripped) and stripped[end] == ":":
        label = stripped[:end]
        if is_cl_name(label):
            return label.upper(), stripped[end + 1 :].lstrip()

    return None, stripped


def extract_comment(text: str) -> tuple[str, str | None]:
    """
    Split a trailing comment off command text.

    A comment starts at an unquoted " /*", or at "/*" when the text begins with
    it. An unterminated comment runs to the end of the text.

    Params:
        text: One logical command string

    Returns:
        (command text without the comment, comment including its delimiters or None)
    """
    if text.lstrip().startswith(COMMENT_START):
        return "", text.strip()

    start = find_unquoted(text, " " + COMMENT_START)
    if start < 0:
        return text.rstrip(), None

    comment_start = start + 1
    close = text.find(COMMENT_END, comment_start + len(COMMENT_START))
    if close < 0:
        comment = text[comment_start:].rstrip()
    else:
        comment = text[comment_start : close + len(COMMENT_END)]
    return text[:start].rstrip(), comment


def extract_keyword_argument(text: str, keyword: str) -> str | None:
    """
    Return the raw text between KEYWORD( and its matching close paren.

    The keyword is matched case-insensitively as a whole word at the top level,
    outside quoted literals; blanks between the keyword and "(" are allowed.

    Params:
        text: Command text to search
        keyword: Parameter keyword to look for

    Returns:
        Argument text exactly as written, or None when the keyword is absent
        or its parenthesis is not closed
    """
    wanted = keyword.upper()
    upper = text.upper()

    for step in scan(text):
        if step.role.in_literal or step.depth != 0:
            continue
        i = step.index
        if not upper.startswith(wanted, i):
            continue
        if i > 0 and is_name_char(text[i - 1]):
            continue

        j = i + len(wanted)
        while j < len(text) and text[j] in WHITESPACE:
            j += 1
        if j >= len(text) or text[j] != "(":
            continue

        close = find_matching_paren(text, j)
        if close < 0:
            return None
        return text[j + 1 : close]

    return None
