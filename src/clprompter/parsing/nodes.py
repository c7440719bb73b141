"""
Command tree node types.

A parsed command is a CommandNode holding ordered Parameter bindings. Each
parameter value is one of four closed variants:

- Scalar: a single literal, variable reference or symbolic value
- Group: juxtaposed sub-values (ELEM parts, list repetitions)
- Expression: a multi-token span; wrapped records explicit source parentheses
- Nested: an embedded command call (CMD-typed parameters)
"""

from __future__ import annotations

from dataclasses import dataclass

from clprompter.parsing.lexer import Token

POSITIONAL_PREFIX = "__pos"


def positional_name(index: int) -> str:
    """Synthesize the placeholder name of the index-th (1-based) positional parameter."""
    return f"{POSITIONAL_PREFIX}{index}"


def is_positional_name(name: str) -> bool:
    """Check if a parameter name is a synthesized positional placeholder."""
    return name.startswith(POSITIONAL_PREFIX)


@dataclass(frozen=True)
class Scalar:
    """A single literal, variable reference or symbolic value."""

    text: str


@dataclass(frozen=True)
class Group:
    """Juxtaposed sub-values, rendered space-separated."""

    items: tuple[Value, ...]


@dataclass(frozen=True)
class Expression:
    """A multi-token span that does not collapse to one scalar."""

    tokens: tuple[Token, ...]
    wrapped: bool = False

    @property
    def inner_text(self) -> str:
        """Source text of the tokens without the wrapping parentheses."""
        return "".join(token.text for token in self.tokens)


@dataclass(frozen=True)
class Nested:
    """An embedded command call."""

    command: CommandNode


Value = Scalar | Group | Expression | Nested


@dataclass(frozen=True)
class Parameter:
    """One parameter binding of a command."""

    name: str
    value: Value

    @property
    def is_positional(self) -> bool:
        return is_positional_name(self.name)

    def to_text(self) -> str:
        """Render as KEYWORD(value), or the bare value for positional bindings."""
        rendered = render_value(self.value)
        if self.is_positional:
            return rendered
        return f"{self.name}({rendered})"


@dataclass(frozen=True)
class CommandNode:
    """
    A parsed command call.

    Params:
        name: Command name, possibly library qualified
        parameters: Ordered parameter bindings; positional bindings come first
        comment: Trailing comment including its delimiters
        label: Statement label without the colon
    """

    name: str
    parameters: tuple[Parameter, ...] = ()
    comment: str | None = None
    label: str | None = None

    @property
    def keywords(self) -> list[str]:
        """Names of the keyword (non-positional) parameters in source order."""
        return [p.name for p in self.parameters if not p.is_positional]

    @property
    def positionals(self) -> list[Parameter]:
        return [p for p in self.parameters if p.is_positional]

    def get(self, keyword: str) -> Value | None:
        """Return the value bound to keyword (case-insensitive), or None."""
        wanted = keyword.upper()
        for parameter in self.parameters:
            if parameter.name.upper() == wanted:
                return parameter.value
        return None

    def to_text(self, *, include_label: bool = True, include_comment: bool = False) -> str:
        """
        Render the command as canonical single-line text.

        Params:
            include_label: Prefix "LABEL: " when the command has a label
            include_comment: Append the trailing comment when present

        Returns:
            Command text with single spaces between parameters
        """
        parts = [self.name] + [p.to_text() for p in self.parameters]
        text = " ".join(parts)
        if include_label and self.label:
            text = f"{self.label}: {text}"
        if include_comment and self.comment:
            text = f"{text} {self.comment}"
        return text


def render_value(value: Value) -> str:
    """
    Render a parameter value back to CL text.

    Params:
        value: Any Value variant

    Returns:
        Source text for the value; Group items are separated by one space

    Raises:
        TypeError: If value is not one of the Value variants
    """
    if isinstance(value, Scalar):
        return value.text
    if isinstance(value, Group):
        return " ".join(render_value(item) for item in value.items)
    if isinstance(value, Expression):
        if value.wrapped:
            return f"({value.inner_text})"
        return value.inner_text
    if isinstance(value, Nested):
        return value.command.to_text(include_label=False)
    raise TypeError(f"Unknown value node: {value!r}")
