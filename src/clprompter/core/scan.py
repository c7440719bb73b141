"""
Quote and parenthesis tracking for CL text.

Every component that needs to know "am I inside a string" or "where does this
parenthesized span end" goes through this module, so the definition of a quoted
literal and of a matching parenthesis is the same everywhere.

Rules:
- A single-quoted literal runs to the next unescaped single quote; a doubled
  quote ('') inside it is an escaped quote and does not close the literal.
- A double-quoted literal runs to the next double quote (no escape form).
- Parentheses inside either kind of literal are ignored for depth.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

QUOTE_CHARS = ("'", '"')
WHITESPACE = (" ", "\t")


class CharRole(Enum):
    """Role of one character as seen by the scan state machine."""

    PLAIN = "plain"
    QUOTE_OPEN = "quote_open"
    QUOTED = "quoted"
    QUOTE_CLOSE = "quote_close"
    PAREN_OPEN = "paren_open"
    PAREN_CLOSE = "paren_close"

    @property
    def in_literal(self) -> bool:
        """True for characters that belong to a quoted literal, delimiters included."""
        return self in (CharRole.QUOTE_OPEN, CharRole.QUOTED, CharRole.QUOTE_CLOSE)


@dataclass(frozen=True)
class ScanStep:
    """
    One character of a scan.

    An opening parenthesis and its matching close report the same depth: the
    depth of the text that encloses the pair.
    """

    index: int
    char: str
    role: CharRole
    depth: int


class ScanState:
    """Left-to-right quote/paren state for a single pass over a string."""

    def __init__(self) -> None:
        self.quote: str | None = None
        self.depth = 0
        self._escape_pending = False

    @property
    def in_quote(self) -> bool:
        return self.quote is not None

    def advance(self, ch: str, lookahead: str = "") -> CharRole:
        """
        Consume one character and report its role.

        Params:
            ch: Character being consumed
            lookahead: The following character, or "" at end of text

        Returns:
            The role of ch
        """
        if self.quote is not None:
            if self._escape_pending:
                self._escape_pending = False
                return CharRole.QUOTED
            if ch == self.quote:
                if ch == "'" and lookahead == "'":
                    self._escape_pending = True
                    return CharRole.QUOTED
                self.quote = None
                return CharRole.QUOTE_CLOSE
            return CharRole.QUOTED

        if ch in QUOTE_CHARS:
            self.quote = ch
            return CharRole.QUOTE_OPEN
        if ch == "(":
            self.depth += 1
            return CharRole.PAREN_OPEN
        if ch == ")":
            self.depth -= 1
            return CharRole.PAREN_CLOSE
        return CharRole.PLAIN


def scan(text: str, start: int = 0) -> Iterator[ScanStep]:
    """
    Walk text from start, yielding the role and paren depth of each character.

    The state machine starts outside any literal at depth 0, so start must be a
    position known to be outside quotes.
    """
    state = ScanState()
    for index in range(start, len(text)):
        ch = text[index]
        lookahead = text[index + 1] if index + 1 < len(text) else ""
        role = state.advance(ch, lookahead)
        depth = state.depth - 1 if role == CharRole.PAREN_OPEN else state.depth
        yield ScanStep(index=index, char=ch, role=role, depth=depth)


def is_in_quote(text: str, position: int) -> bool:
    """
    Check if the character at position belongs to a quoted literal.

    Params:
        text: Text to inspect
        position: 0-based index into text

    Returns:
        True when the character is a literal delimiter or literal content
    """
    for step in scan(text):
        if step.index == position:
            return step.role.in_literal
    return False


def literal_end(text: str, start: int) -> tuple[int, bool]:
    """
    Find the end of the quoted literal that opens at start.

    Params:
        text: Text containing the literal
        start: Index of the opening quote

    Returns:
        (index just past the closing quote, terminated). An unterminated
        literal runs to the end of text and reports terminated=False.
    """
    for step in scan(text, start):
        if step.role == CharRole.QUOTE_CLOSE:
            return step.index + 1, True
    return len(text), False


def find_matching_paren(text: str, open_index: int) -> int:
    """
    Find the close-paren matching the open-paren at open_index.

    Quoted content is skipped. Returns -1 when the span is unbalanced.
    """
    if open_index >= len(text) or text[open_index] != "(":
        return -1
    for step in scan(text, open_index):
        if step.role == CharRole.PAREN_CLOSE and step.depth == 0:
            return step.index
    return -1


def find_unquoted(text: str, needle: str, start: int = 0) -> int:
    """
    Find the first occurrence of needle that starts outside quoted literals.

    Params:
        text: Text to search
        needle: Substring to look for
        start: Index to begin searching from (must be outside quotes)

    Returns:
        Index of the match or -1
    """
    for step in scan(text, start):
        if step.role.in_literal:
            continue
        if text.startswith(needle, step.index):
            return step.index
    return -1


def split_top_level(text: str, *, split_groups: bool = False) -> list[str]:
    """
    Split text on whitespace that is outside quotes and parentheses.

    Params:
        text: Text to split
        split_groups: Also split where a top-level parenthesized group begins or
            ends, so "(A B)(C D)" yields two pieces

    Returns:
        Non-empty, stripped pieces in source order
    """
    pieces: list[str] = []
    current: list[str] = []

    def flush() -> None:
        piece = "".join(current).strip()
        if piece:
            pieces.append(piece)
        current.clear()

    for step in scan(text):
        if step.role == CharRole.PLAIN and step.depth == 0 and step.char in WHITESPACE:
            flush()
            continue
        if split_groups and step.role == CharRole.PAREN_OPEN and step.depth == 0:
            flush()
        current.append(step.char)
        if split_groups and step.role == CharRole.PAREN_CLOSE and step.depth == 0:
            flush()
    flush()
    return pieces


def split_unquoted(text: str, separator: str) -> list[str]:
    """
    Split text on a single-character separator outside quotes and parentheses.

    Empty pieces are kept so positions are preserved ("A//B" gives three parts).
    """
    parts: list[str] = []
    current: list[str] = []
    for step in scan(text):
        if step.role == CharRole.PLAIN and step.depth == 0 and step.char == separator:
            parts.append("".join(current).strip())
            current.clear()
            continue
        current.append(step.char)
    parts.append("".join(current).strip())
    return parts


def strip_outer_parens(text: str) -> str:
    """
    Remove one pair of enclosing parentheses when they match each other.

    "(A B)" becomes "A B"; "(A) (B)" is returned unchanged because the first
    parenthesis closes before the end of the text.
    """
    stripped = text.strip()
    if stripped.startswith("(") and find_matching_paren(stripped, 0) == len(stripped) - 1:
        return stripped[1:-1].strip()
    return stripped
