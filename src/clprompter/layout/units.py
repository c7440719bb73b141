"""
Layout units.

The formatter never looks at the command tree directly: the tree is first
flattened into units, strings that may be separated by a line break but never
split (apart from the long-string exception handled by the formatter). A
keyword's "KW(" is glued to the first unit of its value and the closing
parenthesis to the last, so a line never ends with a bare "KW(".
"""

from clprompter.parsing.nodes import (
    CommandNode,
    Expression,
    Group,
    Nested,
    Parameter,
    Scalar,
    Value,
)


def _glue(units: list[str], opening: str, closing: str) -> list[str]:
    if not units:
        return [opening + closing]
    glued = list(units)
    glued[0] = opening + glued[0]
    glued[-1] = glued[-1] + closing
    return glued


def expression_units(value: Expression) -> list[str]:
    """Split an expression at its blanks; a wrapped expression keeps its parentheses."""
    units: list[str] = []
    current: list[str] = []
    for token in value.tokens:
        if token.is_space:
            if current:
                units.append("".join(current))
                current = []
            continue
        current.append(token.text)
    if current:
        units.append("".join(current))

    if value.wrapped:
        return _glue(units, "(", ")")
    return units


def value_units(value: Value) -> list[str]:
    """
    Flatten a parameter value into layout units.

    Raises:
        TypeError: If value is not one of the Value variants
    """
    if isinstance(value, Scalar):
        return [value.text] if value.text else []
    if isinstance(value, Group):
        return [unit for item in value.items for unit in value_units(item)]
    if isinstance(value, Expression):
        return expression_units(value)
    if isinstance(value, Nested):
        return [value.command.name] + command_units(value.command)
    raise TypeError(f"Unknown value node: {value!r}")


def parameter_units(parameter: Parameter) -> list[str]:
    units = value_units(parameter.value)
    if parameter.is_positional:
        return units
    return _glue(units, f"{parameter.name}(", ")")


def command_units(node: CommandNode) -> list[str]:
    """Flatten every parameter of a command (not its name) into layout units."""
    return [unit for parameter in node.parameters for unit in parameter_units(parameter)]
