"""Quote-aware case conversion for command text."""

from clprompter.core.scan import scan

UPPER = "*UPPER"
LOWER = "*LOWER"
NONE = "*NONE"


def convert_case(text: str, case: str) -> str:
    """
    Convert the case of text outside quoted literals.

    Params:
        text: Command text or a fragment of it that starts outside a literal
        case: *UPPER, *LOWER or *NONE

    Returns:
        Converted text; quoted literals are left exactly as written

    Raises:
        ValueError: If case is not one of the three options
    """
    option = case.strip().upper()
    if option == NONE:
        return text
    if option not in (UPPER, LOWER):
        raise ValueError(f"Unknown case option: {case!r}")

    convert = str.upper if option == UPPER else str.lower
    return "".join(
        step.char if step.role.in_literal else convert(step.char) for step in scan(text)
    )
