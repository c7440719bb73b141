"""
Structural parser for CL commands.

This module turns a token stream into a CommandNode: the leading command
token, any positional values, and KEYWORD(value) parameters whose content is
grouped into the Scalar / Group / Expression / Nested value variants.
"""

from clprompter.core.names import is_command_name
from clprompter.exceptions import ErrorContext, ParseError
from clprompter.parsing.lexer import (
    SCALAR_TYPES,
    Token,
    TokenType,
    tokenize,
    validate_tokens,
)
from clprompter.parsing.nodes import (
    CommandNode,
    Expression,
    Group,
    Nested,
    Parameter,
    Scalar,
    Value,
    positional_name,
)
from clprompter.parsing.source import extract_comment, split_label


class CommandParser:
    """
    Parser for a single CL command.

    The parser is stateless between calls; one instance may be reused for any
    number of commands.
    """

    def parse(self, text: str) -> CommandNode:
        """
        Parse one logical command string.

        A leading "LABEL:" and a trailing comment are split off before lexing
        and stored on the returned node.

        Params:
            text: Command text with continuations already joined

        Returns:
            The parsed command

        Raises:
            LexError: If the text has no command name or an unterminated literal
            ParseError: If parentheses are unbalanced or a positional value
                follows a keyword parameter
        """
        label, rest = split_label(text)
        command_text, comment = extract_comment(rest)
        tokens = tokenize(command_text)
        validate_tokens(tokens, command_text)
        node = self.parse_tokens(tokens, command_text)
        return CommandNode(
            name=node.name,
            parameters=node.parameters,
            comment=comment,
            label=label,
        )

    def parse_tokens(self, tokens: list[Token], text: str | None = None) -> CommandNode:
        """
        Build a command node from a validated token stream.

        Params:
            tokens: Token list whose first entry is the command token
            text: Source text, used only for error locations

        Returns:
            Command node without label or comment

        Raises:
            ParseError: If parentheses are unbalanced or a positional value
                follows a keyword parameter
        """
        name = tokens[0].text.upper()
        parameters: list[Parameter] = []
        seen_keyword = False
        i = 1

        while i < len(tokens):
            token = tokens[i]

            if token.is_space:
                i += 1
                continue

            if token.type == TokenType.PAREN_CLOSE:
                raise ParseError(
                    "Unmatched closing parenthesis",
                    ErrorContext(command_text=text, position=token.position),
                )

            if self._starts_keyword_parameter(tokens, i):
                keyword = token.text.upper()
                close = self._matching_close(tokens, i + 1, text, keyword)
                value = self._parse_value(tokens[i + 2 : close], text, keyword)
                parameters.append(Parameter(keyword, value))
                seen_keyword = True
                i = close + 1
                continue

            if seen_keyword:
                raise ParseError(
                    "Positional value after a keyword parameter",
                    ErrorContext(command_text=text, position=token.position),
                )

            end = self._positional_end(tokens, i, text)
            if (
                token.type == TokenType.PAREN_OPEN
                and self._matching_close(tokens, i, text) == end - 1
            ):
                value = self._collapse(tokens[i + 1 : end - 1], wrapped=True)
            else:
                value = self._collapse(tokens[i:end], wrapped=False)
            parameters.append(Parameter(positional_name(len(parameters) + 1), value))
            i = end

        return CommandNode(name=name, parameters=tuple(parameters))

    def _starts_keyword_parameter(self, tokens: list[Token], i: int) -> bool:
        """Check for a KEYWORD token immediately followed by an open paren."""
        return (
            tokens[i].type == TokenType.KEYWORD
            and i + 1 < len(tokens)
            and tokens[i + 1].type == TokenType.PAREN_OPEN
        )

    def _matching_close(
        self,
        tokens: list[Token],
        open_index: int,
        text: str | None,
        keyword: str | None = None,
    ) -> int:
        """
        Find the token index of the paren that closes tokens[open_index].

        Quoted literals reach the parser as whole STRING tokens cut by the scan
        machine, so PAREN tokens are exactly the unquoted parentheses and
        counting them here agrees with find_matching_paren on the source.

        Raises:
            ParseError: If the span is not closed before the end of the stream
        """
        depth = 0
        for j in range(open_index, len(tokens)):
            token_type = tokens[j].type
            if token_type == TokenType.PAREN_OPEN:
                depth += 1
            elif token_type == TokenType.PAREN_CLOSE:
                depth -= 1
                if depth == 0:
                    return j
        raise ParseError(
            "Unbalanced parentheses",
            ErrorContext(
                command_text=text,
                position=tokens[open_index].position,
                keyword=keyword,
            ),
        )

    def _positional_end(self, tokens: list[Token], start: int, text: str | None) -> int:
        """Return the index just past a positional value (a run of non-space tokens)."""
        i = start
        while i < len(tokens):
            token_type = tokens[i].type
            if token_type == TokenType.SPACE:
                break
            if token_type == TokenType.PAREN_CLOSE:
                raise ParseError(
                    "Unmatched closing parenthesis",
                    ErrorContext(command_text=text, position=tokens[i].position),
                )
            if token_type == TokenType.PAREN_OPEN:
                i = self._matching_close(tokens, i, text) + 1
                continue
            i += 1
        return i

    def _parse_value(
        self, tokens: list[Token], text: str | None, keyword: str | None = None
    ) -> Value:
        """
        Group the tokens between a parameter's parentheses into a value.

        Repeatedly, skipping blanks: a parenthesized span becomes a wrapped
        Expression; otherwise the run of tokens up to the next paren boundary
        becomes a Scalar (one scalar token) or an unwrapped Expression. A token
        immediately followed by "(" (a built-in function call, for example)
        keeps its argument span in the same run. Several groups form a Group.
        """
        nested = self._parse_nested(tokens, text)
        if nested is not None:
            return nested

        groups: list[Value] = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token.is_space:
                i += 1
                continue

            if token.type == TokenType.PAREN_OPEN:
                close = self._matching_close(tokens, i, text, keyword)
                groups.append(self._collapse(tokens[i + 1 : close], wrapped=True))
                i = close + 1
                continue

            start = i
            while i < len(tokens):
                token_type = tokens[i].type
                if token_type == TokenType.PAREN_OPEN:
                    if tokens[i - 1].is_space:
                        break
                    i = self._matching_close(tokens, i, text, keyword) + 1
                    continue
                if token_type == TokenType.PAREN_CLOSE:
                    raise ParseError(
                        "Unmatched closing parenthesis",
                        ErrorContext(
                            command_text=text,
                            position=tokens[i].position,
                            keyword=keyword,
                        ),
                    )
                i += 1

            run = tokens[start:i]
            while run and run[-1].is_space:
                run.pop()
            groups.append(self._collapse(run, wrapped=False))

        if not groups:
            return Scalar("")
        if len(groups) == 1:
            return groups[0]
        return Group(tuple(groups))

    def _collapse(self, tokens: list[Token], wrapped: bool) -> Value:
        if not wrapped and len(tokens) == 1 and tokens[0].type in SCALAR_TYPES:
            return Scalar(tokens[0].text)
        return Expression(tuple(tokens), wrapped=wrapped)

    def _parse_nested(self, tokens: list[Token], text: str | None) -> Nested | None:
        """
        Recognize an embedded command call.

        The content must start with a command-shaped name followed by a blank,
        and contain at least one top-level KEYWORD( parameter.
        """
        body = tokens
        while body and body[0].is_space:
            body = body[1:]
        if len(body) < 3 or not body[1].is_space:
            return None

        head = body[0]
        if head.type not in (TokenType.KEYWORD, TokenType.VALUE):
            return None
        if not is_command_name(head.text):
            return None

        # PAREN tokens are unquoted parentheses only; see _matching_close
        depth = 0
        has_keyword = False
        for j, token in enumerate(body):
            if token.type == TokenType.PAREN_OPEN:
                if depth == 0 and j > 0 and body[j - 1].type == TokenType.KEYWORD:
                    has_keyword = True
                depth += 1
            elif token.type == TokenType.PAREN_CLOSE:
                depth -= 1
        if not has_keyword:
            return None

        command_token = Token(TokenType.COMMAND, head.text, head.position)
        return Nested(self.parse_tokens([command_token, *body[1:]], text))


def parse_tokens(tokens: list[Token], text: str | None = None) -> CommandNode:
    """
    Convenience function to build a command node from tokens.

    Params:
        tokens: Token list starting with the command token
        text: Source text for error locations

    Returns:
        Parsed command without label or comment

    Raises:
        ParseError: If the token stream is structurally invalid
    """
    return CommandParser().parse_tokens(tokens, text)


def parse_command(text: str) -> CommandNode:
    """
    Convenience function to parse a command string.

    Params:
        text: The command text to parse

    Returns:
        Parsed command including its label and trailing comment

    Raises:
        LexError: If the text cannot be tokenized into a command
        ParseError: If the command is structurally invalid
    """
    parser = CommandParser()
    return parser.parse(text)
