"""
Parameter schema model.

A command definition describes each parameter as a recursive shape: a simple
leaf, a QUAL (slash-qualified name) or an ELEM (space-separated group). ELEM
parts may themselves be QUAL or ELEM. The schema is built by an external
command-definition loader; this module only models it and checks it is
structurally sound.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from attrs import field, frozen

from clprompter.exceptions import SchemaError

CL_DATA_TYPES = frozenset(
    {
        "DEC",
        "LGL",
        "CHAR",
        "INT2",
        "INT4",
        "UINT2",
        "UINT4",
        "NAME",
        "GENERIC",
        "VARNAME",
        "DATE",
        "TIME",
        "CMD",
        "X",
        "ZEROELEM",
        "NULL",
        "CMDSTR",
        "PNAME",
        "SNAME",
        "CNAME",
    }
)

CONTAINER_TYPES = frozenset({"ELEM", "QUAL"})

# Types whose values are object names rather than free text
NAME_TYPES = frozenset({"NAME", "SNAME", "CNAME", "PNAME", "GENERIC", "VARNAME"})

# Types whose values are command strings and are never quoted
COMMAND_TYPES = frozenset({"CMD", "CMDSTR"})


def _upper(value: str | None) -> str:
    return (value or "").strip().upper()


def _as_tuple(values: Iterable[Any] | None) -> tuple:
    return tuple(values or ())


def _non_empty_parts(instance: Any, attribute: Any, value: tuple) -> None:
    if not value:
        raise SchemaError("", f"{type(instance).__name__} needs at least one part")


def _qual_parts(instance: Any, attribute: Any, value: tuple) -> None:
    _non_empty_parts(instance, attribute, value)
    for part in value:
        if not isinstance(part, SimpleSchema):
            raise SchemaError("", "QUAL parts must be simple values")


def _elem_parts(instance: Any, attribute: Any, value: tuple) -> None:
    _non_empty_parts(instance, attribute, value)
    for part in value:
        if not isinstance(part, SimpleSchema | QualSchema | ElemSchema):
            raise SchemaError("", f"Unsupported ELEM part: {part!r}")


@frozen
class SimpleSchema:
    """A leaf value with an optional data type and special values."""

    type: str = field(default="", converter=_upper)
    allowed_values: tuple[str, ...] = field(default=(), converter=_as_tuple)

    @property
    def is_command(self) -> bool:
        return self.type in COMMAND_TYPES


@frozen
class QualSchema:
    """
    A qualified name such as LIB/OBJ.

    parts[0] describes the rightmost source segment (the object), parts[1] the
    segment before it (usually the library), and so on.
    """

    parts: tuple[SimpleSchema, ...] = field(converter=_as_tuple, validator=_qual_parts)


@frozen
class ElemSchema:
    """A space-separated group of heterogeneous parts, in declared order."""

    parts: tuple["ElementSchema", ...] = field(
        converter=_as_tuple, validator=_elem_parts
    )

    @property
    def is_flat(self) -> bool:
        """True when every part is a simple leaf."""
        return all(isinstance(part, SimpleSchema) for part in self.parts)


ElementSchema = SimpleSchema | QualSchema | ElemSchema


def _keyword(instance: Any, attribute: Any, value: str) -> None:
    if not value:
        raise SchemaError("", "parameter keyword must not be blank")


def _positive(instance: Any, attribute: Any, value: int) -> None:
    if value < 1:
        raise SchemaError(instance.keyword, f"max must be at least 1, got {value}")


@frozen
class ParameterSchema:
    """
    Declared shape of one command parameter.

    Params:
        keyword: Parameter keyword, stored uppercase
        shape: Simple, QUAL or ELEM description of one instance
        max: Maximum number of instances (list parameters have max > 1)
        default: Declared default text, if any
    """

    keyword: str = field(converter=_upper, validator=_keyword)
    shape: ElementSchema = field(factory=SimpleSchema)
    max: int = field(default=1, validator=_positive)
    default: str | None = None

    @property
    def is_multi_instance(self) -> bool:
        return self.max > 1

    @property
    def arity(self) -> int:
        """Number of parts in one instance (1 for simple parameters)."""
        if isinstance(self.shape, QualSchema | ElemSchema):
            return len(self.shape.parts)
        return 1

    @property
    def is_simple(self) -> bool:
        return isinstance(self.shape, SimpleSchema)

    @property
    def type(self) -> str:
        """Declared data type, or QUAL/ELEM for containers."""
        if isinstance(self.shape, QualSchema):
            return "QUAL"
        if isinstance(self.shape, ElemSchema):
            return "ELEM"
        return self.shape.type

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParameterSchema":
        """
        Build a schema from a dict-shaped parameter definition.

        Keys are matched case-insensitively. Recognized keys are Kwd (or
        keyword), Type, Max, Dft (or default), Qual and Elem (lists of part
        definitions) and Values (special values).

        Params:
            data: Parameter definition, e.g. {"Kwd": "FILE", "Type": "QUAL",
                "Qual": [{"Type": "NAME"}, {"Type": "NAME", "Values": ["*LIBL"]}]}

        Returns:
            Validated ParameterSchema

        Raises:
            SchemaError: If the definition is structurally invalid
        """
        entry = _normalize_keys(data)
        keyword = entry.get("kwd", entry.get("keyword", ""))
        try:
            max_count = int(entry.get("max", 1))
        except (TypeError, ValueError) as e:
            raise SchemaError(
                str(keyword), f"max is not a number: {entry.get('max')!r}"
            ) from e

        try:
            shape = _element_from_dict(entry, keyword)
        except SchemaError as e:
            if e.keyword:
                raise
            raise SchemaError(str(keyword), e.reason) from e

        return cls(
            keyword=keyword,
            shape=shape,
            max=max_count,
            default=entry.get("dft", entry.get("default")),
        )


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).lower(): value for key, value in data.items()}


def _element_from_dict(entry: dict[str, Any], keyword: str) -> ElementSchema:
    declared = _upper(entry.get("type"))
    qual = entry.get("qual")
    elem = entry.get("elem")

    if declared == "QUAL" or (qual and declared != "ELEM"):
        parts = [_element_from_dict(_normalize_keys(part), keyword) for part in qual or ()]
        for part in parts:
            if not isinstance(part, SimpleSchema):
                raise SchemaError(keyword, "QUAL parts must be simple values")
        return QualSchema(parts)

    if declared == "ELEM" or elem:
        return ElemSchema(
            [_element_from_dict(_normalize_keys(part), keyword) for part in elem or ()]
        )

    values = entry.get("values", entry.get("allowed_values", ()))
    return SimpleSchema(type=declared, allowed_values=values)
