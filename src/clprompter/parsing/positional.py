"""
Positional parameter naming.

The parser cannot know which keyword a positional value belongs to; that comes
from the command definition. Once the caller knows the command's positional
keywords (in position order), the synthesized placeholder names are replaced
so the values can be decomposed and reassembled like keyword parameters.
"""

from collections.abc import Sequence
from dataclasses import replace

from clprompter.parsing.nodes import CommandNode, Parameter


def name_positional_parameters(
    node: CommandNode,
    keywords: Sequence[str],
    max_positional: int | None = None,
) -> CommandNode:
    """
    Replace positional placeholder names with the command's keywords.

    Params:
        node: Parsed command
        keywords: Keywords in positional order
        max_positional: Number of positional values the command accepts; values
            beyond it keep their placeholder names. Defaults to len(keywords).

    Returns:
        A new node; the input node is not modified
    """
    limit = len(keywords) if max_positional is None else min(max_positional, len(keywords))
    explicit = {name.upper() for name in node.keywords}

    renamed: list[Parameter] = []
    position = 0
    for parameter in node.parameters:
        if not parameter.is_positional:
            renamed.append(parameter)
            continue

        if position < limit:
            keyword = keywords[position].upper()
            position += 1
            if keyword not in explicit:
                renamed.append(Parameter(keyword, parameter.value))
                continue
        renamed.append(parameter)

    return replace(node, parameters=tuple(renamed))
