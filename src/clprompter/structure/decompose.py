"""
Value decomposer.

Turns the raw text of a parameter value into the schema-shaped structure the
form layer edits: a string for simple values, a list of parts for QUAL and
ELEM values (QUAL parts stored rightmost-first) and a list of instances for
parameters that repeat.
"""

import logging
from collections.abc import Iterable, Mapping

from clprompter.core.scan import (
    WHITESPACE,
    CharRole,
    find_matching_paren,
    scan,
    split_top_level,
    split_unquoted,
    strip_outer_parens,
)
from clprompter.core.types import FormValue, FormValues
from clprompter.parsing.nodes import CommandNode, render_value
from clprompter.structure.schema import (
    ElemSchema,
    ElementSchema,
    ParameterSchema,
    QualSchema,
    SimpleSchema,
)

logger = logging.getLogger(__name__)


def split_qualified(text: str, arity: int) -> list[str]:
    """
    Split a qualified name into parts, rightmost segment first.

    Params:
        text: Source text such as "MYLIB/MYFILE" (optionally parenthesized)
        arity: Declared number of QUAL parts

    Returns:
        Exactly arity parts; missing qualifiers are empty strings and surplus
        leading segments stay joined in the last part
    """
    stripped = strip_outer_parens(text)
    if not stripped:
        return [""] * arity

    segments = [s for s in split_unquoted(stripped, "/") if s]
    if len(segments) > arity:
        keep = arity - 1
        head = "/".join(segments[: len(segments) - keep])
        segments = [head] + segments[len(segments) - keep :]

    parts = list(reversed(segments))
    parts.extend([""] * (arity - len(parts)))
    return parts


def split_instances(text: str) -> list[str]:
    """Split a repeated value into its top-level instances (bare tokens or paren groups)."""
    return split_top_level(text, split_groups=True)


def _take_token(text: str, stop_at_paren: bool = False) -> tuple[str, str]:
    """Take the next top-level token from text; returns (token, remaining text)."""
    text = text.lstrip()
    for step in scan(text):
        if step.depth != 0:
            continue
        if step.role == CharRole.PLAIN and step.char in WHITESPACE:
            return text[: step.index], text[step.index :].lstrip()
        if stop_at_paren and step.role == CharRole.PAREN_OPEN:
            return text[: step.index], text[step.index :].lstrip()
    return text, ""


def _fit(parts: list[FormValue], arity: int) -> list[FormValue]:
    """Pad with empty strings, or fold surplus simple tokens into the last part."""
    if len(parts) > arity and all(isinstance(p, str) for p in parts):
        parts = parts[: arity - 1] + [" ".join(parts[arity - 1 :])]
    parts = parts[:arity] if len(parts) > arity else parts
    return parts + [""] * (arity - len(parts))


def _decompose_elem(text: str, schema: ElemSchema) -> list[FormValue]:
    inner = strip_outer_parens(text)
    arity = len(schema.parts)

    if schema.is_flat:
        return _fit(list(split_top_level(inner)), arity)

    parts: list[FormValue] = []
    rest = inner
    for part in schema.parts:
        if isinstance(part, QualSchema):
            token, rest = _take_token(rest, stop_at_paren=True)
            parts.append(split_qualified(token, len(part.parts)))
            continue

        if isinstance(part, ElemSchema):
            rest = rest.lstrip()
            if rest.startswith("("):
                close = find_matching_paren(rest, 0)
                end = close if close >= 0 else len(rest)
                parts.append(_decompose_elem(rest[1:end], part))
                rest = rest[end + 1 :].lstrip()
            else:
                # a container special value such as *ALL stands for the whole group
                token, rest = _take_token(rest)
                parts.append([token] if token else [])
            continue

        token, rest = _take_token(rest)
        parts.append(token)

    return parts


def decompose_element(text: str, schema: ElementSchema) -> FormValue:
    """
    Decompose the text of one value instance according to its shape.

    Params:
        text: Value text without the keyword's parentheses
        schema: Simple, QUAL or ELEM description

    Returns:
        A string for simple values, a list of parts for QUAL/ELEM values

    Raises:
        TypeError: If schema is not an element schema
    """
    if isinstance(schema, SimpleSchema):
        return text.strip()
    if isinstance(schema, QualSchema):
        return split_qualified(text, len(schema.parts))
    if isinstance(schema, ElemSchema):
        return _decompose_elem(text, schema)
    raise TypeError(f"Unknown element schema: {schema!r}")


def decompose_value(text: str, schema: ParameterSchema) -> FormValue:
    """
    Decompose a parameter's value text into its form structure.

    Params:
        text: Raw text between KEYWORD( and its closing parenthesis
        schema: Declared parameter schema

    Returns:
        The structured value; a list of instance values when max > 1
    """
    if not schema.is_multi_instance:
        return decompose_element(text, schema.shape)

    instances = split_instances(text)
    if isinstance(schema.shape, ElemSchema) and not any(
        piece.startswith("(") for piece in instances
    ):
        # a single unparenthesized ELEM instance, e.g. FILE(A B) or FILE(*ALL)
        instances = [text.strip()] if text.strip() else []

    return [decompose_element(instance, schema.shape) for instance in instances]


def decompose_command(
    node: CommandNode,
    schemas: Iterable[ParameterSchema] | Mapping[str, ParameterSchema],
) -> FormValues:
    """
    Decompose every parameter of a parsed command that the schema knows.

    Parameters whose keyword is not in the schema, and positional values that
    were never given a keyword, are skipped without affecting the others.

    Params:
        node: Parsed command
        schemas: Parameter schemas, as an iterable or keyed by keyword

    Returns:
        Keyword -> structured value, in source order
    """
    if isinstance(schemas, Mapping):
        by_keyword = {key.upper(): schema for key, schema in schemas.items()}
    else:
        by_keyword = {schema.keyword: schema for schema in schemas}

    values: FormValues = {}
    for parameter in node.parameters:
        if parameter.is_positional:
            logger.debug("Skipping unnamed positional value %s", parameter.name)
            continue
        schema = by_keyword.get(parameter.name.upper())
        if schema is None:
            logger.debug(
                "Skipping parameter %s: not defined for %s", parameter.name, node.name
            )
            continue
        values[schema.keyword] = decompose_value(render_value(parameter.value), schema)

    return values
