"""
Parameter structure components.

This package provides the parameter schema model, the value decomposer that
turns parameter text into form values, the literal quoting policy and the
reassembler that turns form values back into command text.
"""

from clprompter.structure.assemble import build_command, render_parameter
from clprompter.structure.decompose import (
    decompose_command,
    decompose_value,
    split_qualified,
)
from clprompter.structure.quoting import (
    is_cl_expression,
    is_valid_name,
    quote_if_needed,
)
from clprompter.structure.schema import (
    CL_DATA_TYPES,
    NAME_TYPES,
    ElemSchema,
    ParameterSchema,
    QualSchema,
    SimpleSchema,
)

__all__ = [
    "CL_DATA_TYPES",
    "NAME_TYPES",
    "ElemSchema",
    "ParameterSchema",
    "QualSchema",
    "SimpleSchema",
    "build_command",
    "decompose_command",
    "decompose_value",
    "is_cl_expression",
    "is_valid_name",
    "quote_if_needed",
    "render_parameter",
    "split_qualified",
]
