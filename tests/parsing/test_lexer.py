"""
Tests for the CL lexer: token classification and lexical validation.
"""

from typing import NamedTuple

import pytest

from clprompter.exceptions import LexError
from clprompter.parsing.lexer import Token, TokenType, tokenize, validate_tokens

T = TokenType


class TokenCase(NamedTuple):
    """Test case for tokenizing a short command."""

    name: str
    text: str
    expected: list[tuple[TokenType, str]]


TOKEN_CASES = [
    TokenCase(
        "simple_keywords",
        "CHGVAR VAR(&X) VALUE('SHORT')",
        [
            (T.COMMAND, "CHGVAR"),
            (T.SPACE, " "),
            (T.KEYWORD, "VAR"),
            (T.PAREN_OPEN, "("),
            (T.VARIABLE, "&X"),
            (T.PAREN_CLOSE, ")"),
            (T.SPACE, " "),
            (T.KEYWORD, "VALUE"),
            (T.PAREN_OPEN, "("),
            (T.STRING, "'SHORT'"),
            (T.PAREN_CLOSE, ")"),
        ],
    ),
    TokenCase(
        "symbolic_operator_and_number",
        "IF COND(&A *EQ 1)",
        [
            (T.COMMAND, "IF"),
            (T.SPACE, " "),
            (T.KEYWORD, "COND"),
            (T.PAREN_OPEN, "("),
            (T.VARIABLE, "&A"),
            (T.SPACE, " "),
            (T.OPERATOR, "*EQ"),
            (T.SPACE, " "),
            (T.VALUE, "1"),
            (T.PAREN_CLOSE, ")"),
        ],
    ),
    TokenCase(
        "qualified_values",
        "CALL PGM(QGPL/CUST) X(*LIBL/QCMD)",
        [
            (T.COMMAND, "CALL"),
            (T.SPACE, " "),
            (T.KEYWORD, "PGM"),
            (T.PAREN_OPEN, "("),
            (T.VALUE, "QGPL/CUST"),
            (T.PAREN_CLOSE, ")"),
            (T.SPACE, " "),
            (T.KEYWORD, "X"),
            (T.PAREN_OPEN, "("),
            (T.VALUE, "*LIBL/QCMD"),
            (T.PAREN_CLOSE, ")"),
        ],
    ),
    TokenCase(
        "builtin_function",
        "CHGVAR &X %SST(&Y 1 2)",
        [
            (T.COMMAND, "CHGVAR"),
            (T.SPACE, " "),
            (T.VARIABLE, "&X"),
            (T.SPACE, " "),
            (T.FUNCTION, "%SST"),
            (T.PAREN_OPEN, "("),
            (T.VARIABLE, "&Y"),
            (T.SPACE, " "),
            (T.VALUE, "1"),
            (T.SPACE, " "),
            (T.VALUE, "2"),
            (T.PAREN_CLOSE, ")"),
        ],
    ),
    TokenCase(
        "two_char_operator",
        "IF COND(&A>=&B)",
        [
            (T.COMMAND, "IF"),
            (T.SPACE, " "),
            (T.KEYWORD, "COND"),
            (T.PAREN_OPEN, "("),
            (T.VARIABLE, "&A"),
            (T.OPERATOR, ">="),
            (T.VARIABLE, "&B"),
            (T.PAREN_CLOSE, ")"),
        ],
    ),
    TokenCase(
        "qualified_command",
        "QSYS/DSPJOB OUTPUT(*PRINT)",
        [
            (T.COMMAND, "QSYS/DSPJOB"),
            (T.SPACE, " "),
            (T.KEYWORD, "OUTPUT"),
            (T.PAREN_OPEN, "("),
            (T.SYMBOLIC_VALUE, "*PRINT"),
            (T.PAREN_CLOSE, ")"),
        ],
    ),
]


class TestTokenize:
    """Test token classification."""

    def test_token_cases(self):
        """Test every case in the token table."""
        for case in TOKEN_CASES:
            tokens = [(t.type, t.text) for t in tokenize(case.text)]
            assert tokens == case.expected, f"Failed for {case.name}"

    def test_whitespace_runs_collapse(self):
        """Test that leading blanks are skipped and runs become one SPACE."""
        tokens = tokenize("   DSPJOB    \t JOB(X)")
        assert tokens[0] == Token(T.COMMAND, "DSPJOB")
        assert tokens[0].position == 3
        assert tokens[1] == Token(T.SPACE, " ")
        assert tokens[2].position == 15

    def test_doubled_quote_stays_in_one_string(self):
        """Test that an escaped quote does not split a string token."""
        tokens = tokenize("SNDMSG MSG('it''s done')")
        strings = [t for t in tokens if t.type == T.STRING]
        assert strings == [Token(T.STRING, "'it''s done'")]

    def test_double_quoted_literal(self):
        """Test that a double-quoted literal keeps its blanks and parens."""
        tokens = tokenize('CHGVAR VAR(&X) VALUE("a   (b) c")')
        strings = [t for t in tokens if t.type == T.STRING]
        assert strings == [Token(T.STRING, '"a   (b) c"')]
        assert [t.type for t in tokens].count(T.PAREN_OPEN) == 2

    def test_operator_case_preserved(self):
        """Test that symbolic operators match case-insensitively and keep their text."""
        tokens = tokenize("CHGVAR &X (&A *cat &B)")
        operators = [t for t in tokens if t.type == T.OPERATOR]
        assert operators == [Token(T.OPERATOR, "*cat")]

    def test_single_char_operators(self):
        """Test bare operators such as * and unary minus."""
        tokens = tokenize("CHGVAR &X (&Y * -1)")
        operators = [t.text for t in tokens if t.type == T.OPERATOR]
        assert operators == ["*", "-"]

    def test_symbolic_value_vs_keyword(self):
        """Test *YES is a symbolic value and a bare name is a keyword."""
        tokens = tokenize("CRTPF SIZE(*NOMAX) FILE(CUST)")
        kinds = {t.text: t.type for t in tokens}
        assert kinds["*NOMAX"] == T.SYMBOLIC_VALUE
        assert kinds["CUST"] == T.KEYWORD

    def test_unterminated_string_runs_to_end(self):
        """Test that tokenize never raises on an open literal."""
        tokens = tokenize("CHGVAR VALUE('abc")
        assert tokens[-1] == Token(T.STRING, "'abc")

    def test_token_equality_ignores_position(self):
        """Test that positions are informational only."""
        assert Token(T.VALUE, "X", 5) == Token(T.VALUE, "X")
        assert str(Token(T.VALUE, "X", 5)) == "X"
        assert Token(T.SPACE, " ").is_space


class TestValidateTokens:
    """Test lexical validation."""

    def test_valid_stream(self):
        """Test that a normal command passes."""
        text = "CHGVAR VAR(&X) VALUE('it''s')"
        validate_tokens(tokenize(text), text)

    def test_unterminated_string(self):
        """Test that an open literal is reported at its start."""
        text = "CHGVAR VALUE('abc"
        with pytest.raises(LexError, match="Unterminated quoted string") as exc_info:
            validate_tokens(tokenize(text), text)
        assert exc_info.value.context.position == 13

    def test_missing_command(self):
        """Test streams that do not start with a command name."""
        for text in ["('x')", "'abc'", "123 ABC", ""]:
            with pytest.raises(LexError, match="does not start with a command name"):
                validate_tokens(tokenize(text), text)
