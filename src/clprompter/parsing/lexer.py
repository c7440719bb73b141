"""
Lexer for CL command text.

Converts one logical command string (continuations joined, trailing comment
removed) into an ordered token stream. Classification uses the character
predicates in clprompter.core.names and static operator tables; quoted literals
are delimited by the shared scan state machine.
"""

from dataclasses import dataclass, field
from enum import Enum

from clprompter.core.names import (
    is_command_name,
    is_letter,
    is_name_char,
    is_name_shape,
)
from clprompter.core.scan import QUOTE_CHARS, WHITESPACE, literal_end
from clprompter.exceptions import ErrorContext, LexError


class TokenType(Enum):
    """Type of a lexical token."""

    COMMAND = "command"
    KEYWORD = "keyword"
    VALUE = "value"
    STRING = "string"
    VARIABLE = "variable"
    SYMBOLIC_VALUE = "symbolic_value"
    OPERATOR = "operator"
    FUNCTION = "function"
    PAREN_OPEN = "paren_open"
    PAREN_CLOSE = "paren_close"
    SPACE = "space"


# Token types that can stand alone as a parameter value
SCALAR_TYPES = frozenset(
    {
        TokenType.VALUE,
        TokenType.STRING,
        TokenType.VARIABLE,
        TokenType.SYMBOLIC_VALUE,
        TokenType.FUNCTION,
        TokenType.KEYWORD,
    }
)

SYMBOLIC_OPERATORS = frozenset(
    {
        "*CAT",
        "*BCAT",
        "*TCAT",
        "*AND",
        "*OR",
        "*NOT",
        "*EQ",
        "*GT",
        "*LT",
        "*GE",
        "*LE",
        "*NE",
        "*NG",
        "*NL",
    }
)

TWO_CHAR_OPERATORS = ("||", "|>", "|<", ">=", "<=", "¬=", "¬>", "¬<")
ONE_CHAR_OPERATORS = frozenset("+-/=><&|¬*")


@dataclass(frozen=True)
class Token:
    """A single token; position is the 0-based offset in the lexed text."""

    type: TokenType
    text: str
    position: int = field(default=-1, compare=False)

    def __str__(self) -> str:
        return self.text

    @property
    def is_space(self) -> bool:
        return self.type == TokenType.SPACE


def _word_end(text: str, start: int) -> int:
    """Return the end of the maximal non-space, non-paren run starting at start."""
    i = start
    while i < len(text):
        ch = text[i]
        if ch in WHITESPACE or ch in "()":
            break
        if ch in QUOTE_CHARS:
            i, _ = literal_end(text, i)
            continue
        i += 1
    return i


def _name_run_end(text: str, start: int) -> int:
    i = start
    while i < len(text) and is_name_char(text[i]):
        i += 1
    return i


def tokenize(text: str) -> list[Token]:
    """
    Split command text into tokens.

    Never raises: an unterminated literal is consumed to the end of input and a
    missing command token simply yields a stream that does not start with
    COMMAND. Use validate_tokens to turn those conditions into errors.

    Params:
        text: One logical command string

    Returns:
        Ordered token list; runs of whitespace become a single SPACE token
    """
    tokens: list[Token] = []
    n = len(text)
    i = 0
    while i < n and text[i] in WHITESPACE:
        i += 1

    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if ch in WHITESPACE:
            start = i
            while i < n and text[i] in WHITESPACE:
                i += 1
            tokens.append(Token(TokenType.SPACE, " ", start))
            continue

        if ch == "(":
            tokens.append(Token(TokenType.PAREN_OPEN, ch, i))
            i += 1
            continue

        if ch == ")":
            tokens.append(Token(TokenType.PAREN_CLOSE, ch, i))
            i += 1
            continue

        if ch in QUOTE_CHARS:
            end, _ = literal_end(text, i)
            tokens.append(Token(TokenType.STRING, text[i:end], i))
            i = end
            continue

        if not tokens:
            end = _word_end(text, i)
            word = text[i:end]
            if is_command_name(word):
                tokens.append(Token(TokenType.COMMAND, word, i))
                i = end
                continue

        if ch == "&" and is_letter(nxt):
            end = _name_run_end(text, i + 1)
            tokens.append(Token(TokenType.VARIABLE, text[i:end], i))
            i = end
            continue

        if ch == "*" and is_letter(nxt):
            end = _name_run_end(text, i + 1)
            run = text[i:end]
            if run.upper() in SYMBOLIC_OPERATORS:
                tokens.append(Token(TokenType.OPERATOR, run, i))
            elif end < n and text[end] == "/":
                # *LIBL/OBJ and friends stay one qualified value
                end = _word_end(text, i)
                tokens.append(Token(TokenType.VALUE, text[i:end], i))
            else:
                tokens.append(Token(TokenType.SYMBOLIC_VALUE, run, i))
            i = end
            continue

        if ch == "%" and is_letter(nxt):
            end = i + 1
            while end < n and is_letter(text[end]):
                end += 1
            tokens.append(Token(TokenType.FUNCTION, text[i:end], i))
            i = end
            continue

        if text[i : i + 2] in TWO_CHAR_OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, text[i : i + 2], i))
            i += 2
            continue

        if ch in ONE_CHAR_OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, ch, i))
            i += 1
            continue

        end = _word_end(text, i)
        word = text[i:end]
        token_type = TokenType.KEYWORD if is_name_shape(word) else TokenType.VALUE
        tokens.append(Token(token_type, word, i))
        i = end

    return tokens


def validate_tokens(tokens: list[Token], text: str | None = None) -> None:
    """
    Check a token stream for lexical failures.

    Params:
        tokens: Output of tokenize
        text: The lexed text, used for error locations

    Raises:
        LexError: When the stream does not start with a command token or a
            quoted literal is not terminated
    """
    if not tokens or tokens[0].type != TokenType.COMMAND:
        position = tokens[0].position if tokens else 0
        raise LexError(
            "Command text does not start with a command name",
            ErrorContext(command_text=text, position=position),
        )

    for token in tokens:
        if token.type != TokenType.STRING:
            continue
        end, terminated = literal_end(token.text, 0)
        if not terminated or end != len(token.text):
            raise LexError(
                "Unterminated quoted string",
                ErrorContext(command_text=text, position=token.position),
            )
