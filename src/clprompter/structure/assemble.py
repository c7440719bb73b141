"""
Command reassembler.

Builds command text from the structured values edited in the form, in the
parameter order of the command definition. Parameters left empty, or left at
their default without being touched, are omitted. Every leaf value goes
through the literal quoting policy.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from clprompter.core.types import DefaultsMap, FormValue, FormValues
from clprompter.structure.decompose import decompose_element, decompose_value
from clprompter.structure.quoting import quote_if_needed
from clprompter.structure.schema import (
    ElemSchema,
    ElementSchema,
    ParameterSchema,
    QualSchema,
    SimpleSchema,
)

logger = logging.getLogger(__name__)

LIBL_PREFIX = "*LIBL/"

# Placeholder for an omitted ELEM part that is followed by a specified one
OMITTED_ELEMENT = "*N"


def is_empty(value: FormValue | None) -> bool:
    """Check if a structured value has no non-blank leaf."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return all(is_empty(item) for item in value)


def _normalize(text: str) -> str:
    return " ".join(text.split()).upper()


def _fit_parts(value: FormValue, arity: int, keyword: str) -> list[FormValue]:
    parts = [value] if isinstance(value, str) else list(value)
    if len(parts) != arity:
        logger.debug(
            "Value of %s has %d parts, schema declares %d", keyword, len(parts), arity
        )
    parts = parts[:arity]
    return parts + [""] * (arity - len(parts))


def _leaf_text(value: FormValue) -> str:
    if isinstance(value, str):
        return value
    return " ".join(_leaf_text(item) for item in value if not is_empty(item))


def _wrap_group(text: str) -> str:
    """Parenthesize a group unless it is one special value such as *ALL."""
    if text.startswith("*") and " " not in text:
        return text
    return f"({text})"


def _render_qual(value: FormValue, schema: QualSchema, keyword: str) -> str:
    parts = _fit_parts(value, len(schema.parts), keyword)
    quoted = [
        quote_if_needed(_leaf_text(part), leaf.allowed_values, leaf.type)
        for part, leaf in zip(parts, schema.parts)
    ]
    return "/".join(reversed([q for q in quoted if q]))


def _render_elem(value: FormValue, schema: ElemSchema, keyword: str) -> str:
    parts = _fit_parts(value, len(schema.parts), keyword)
    rendered: list[str] = []
    for part, part_schema in zip(parts, schema.parts):
        text = render_element(part, part_schema, keyword)
        if text and isinstance(part_schema, ElemSchema):
            text = _wrap_group(text)
        rendered.append(text)

    while rendered and not rendered[-1]:
        rendered.pop()
    return " ".join(text or OMITTED_ELEMENT for text in rendered)


def render_element(value: FormValue, schema: ElementSchema, keyword: str = "") -> str:
    """
    Serialize one value instance according to its shape.

    QUAL parts are emitted in source order (library first) joined by "/";
    ELEM parts are space-joined, nested ELEM parts parenthesized. The result
    carries no outer parentheses.

    Params:
        value: Structured value as produced by the decomposer (or raw text)
        schema: Simple, QUAL or ELEM description
        keyword: Owning parameter keyword, for log messages

    Returns:
        Serialized text, empty when the value is empty

    Raises:
        TypeError: If schema is not an element schema
    """
    if isinstance(schema, SimpleSchema):
        text = _leaf_text(value)
        if not text.strip():
            return ""
        return quote_if_needed(text, schema.allowed_values, schema.type)

    if isinstance(value, str):
        value = decompose_element(value, schema)

    if isinstance(schema, QualSchema):
        return _render_qual(value, schema, keyword)
    if isinstance(schema, ElemSchema):
        return _render_elem(value, schema, keyword)
    raise TypeError(f"Unknown element schema: {schema!r}")


def render_parameter(value: FormValue, schema: ParameterSchema) -> str:
    """
    Serialize a parameter's whole value (all instances), without the keyword.

    Instances of a repeated ELEM or QUAL parameter are each parenthesized;
    repeated simple values are space-joined.
    """
    if not schema.is_multi_instance:
        return render_element(value, schema.shape, schema.keyword)

    instances = decompose_value(value, schema) if isinstance(value, str) else value
    rendered = []
    for instance in instances:
        if is_empty(instance):
            continue
        text = render_element(instance, schema.shape, schema.keyword)
        if isinstance(schema.shape, ElemSchema):
            text = _wrap_group(text)
        elif isinstance(schema.shape, QualSchema):
            text = f"({text})"
        rendered.append(text)
    return " ".join(rendered)


def build_command(
    name: str,
    values: FormValues,
    schemas: Iterable[ParameterSchema],
    defaults: DefaultsMap | None = None,
    touched: Iterable[str] = (),
    label: str | None = None,
) -> str:
    """
    Assemble command text from edited parameter values.

    Params:
        name: Command name, optionally library qualified
        values: Keyword -> structured value
        schemas: Parameter schemas in the command's declared order
        defaults: Keyword -> default text; falls back to each schema's default
        touched: Keywords the user changed in the form
        label: Optional statement label

    Returns:
        One-line command text
    """
    defaults = _upper_keys(defaults or {})
    changed = {keyword.upper() for keyword in touched}
    by_keyword = _upper_keys(values)

    command = name.strip()
    if command.upper().startswith(LIBL_PREFIX):
        command = command[len(LIBL_PREFIX) :]

    pieces = []
    if label and label.strip():
        pieces.append(f"{label.strip().upper()}:")
    pieces.append(command)

    for schema in schemas:
        keyword = schema.keyword
        value = by_keyword.get(keyword)

        if is_empty(value):
            logger.debug("Skipping %s: no value", keyword)
            continue

        if (
            schema.is_simple
            and not schema.is_multi_instance
            and not isinstance(value, str)
            and len(value) == 1
        ):
            value = value[0]

        rendered = render_parameter(value, schema)
        if not rendered:
            logger.debug("Skipping %s: value renders empty", keyword)
            continue

        default = defaults.get(keyword, schema.default)
        if keyword not in changed and default is not None:
            if _normalize(rendered) in (
                _normalize(default),
                _normalize(render_parameter(default, schema)),
            ) or (
                isinstance(value, str) and _normalize(value) == _normalize(default)
            ):
                logger.debug("Skipping %s: unchanged default %s", keyword, default)
                continue

        pieces.append(f"{keyword}({rendered})")

    return " ".join(pieces)


def _upper_keys(values: Mapping[str, Any]) -> dict[str, Any]:
    return {key.upper(): value for key, value in values.items()}
