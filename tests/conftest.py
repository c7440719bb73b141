"""
Shared test fixtures and utilities for the clprompter test suite.
"""

import pytest

from clprompter.layout.config import LayoutConfig
from clprompter.structure.schema import (
    ElemSchema,
    ParameterSchema,
    QualSchema,
    SimpleSchema,
)


def join_continuations(text: str, continuation_char: str = "+") -> str:
    """Join formatted source lines back into one logical command.

    A line ending in the continuation character continues on the next line,
    whose leading blanks are dropped. Blanks before the continuation
    character are kept.
    """
    joined = ""
    continuing = False
    for raw_line in text.split("\n"):
        line = raw_line.rstrip()
        if continuing:
            line = line.lstrip()
        if line.endswith(continuation_char):
            joined += line[: -len(continuation_char)]
            continuing = True
        else:
            joined += line
            continuing = False
    return joined.strip()


@pytest.fixture
def join_lines():
    """The continuation joiner, for tests that need to read formatted output back."""
    return join_continuations


@pytest.fixture
def source_config():
    """Source-editor layout: label col 2, command col 14, keywords col 25, margin 72."""
    return LayoutConfig(
        label_position=2,
        left_margin=14,
        kwd_position=25,
        cont_indent=27,
        right_margin=72,
        continuation_char="+",
    )


@pytest.fixture
def narrow_config():
    """Same columns as source_config with the right margin at 70."""
    return LayoutConfig(
        label_position=2,
        left_margin=14,
        kwd_position=25,
        cont_indent=27,
        right_margin=70,
        continuation_char="+",
    )


@pytest.fixture
def wide_config():
    """Everything from column 1, single blanks, margin far away."""
    return LayoutConfig(
        label_position=1,
        left_margin=1,
        kwd_position=0,
        cont_indent=3,
        right_margin=200,
        continuation_char="+",
    )


@pytest.fixture
def qual_file_schema():
    """FILE(library/file) with the usual library special values."""
    return ParameterSchema(
        "FILE",
        QualSchema(
            [
                SimpleSchema("NAME"),
                SimpleSchema("NAME", ["*LIBL", "*CURLIB"]),
            ]
        ),
    )


@pytest.fixture
def cpyf_schemas():
    """A cut-down CPYF definition in declared order."""
    qual = QualSchema(
        [SimpleSchema("NAME"), SimpleSchema("NAME", ["*LIBL", "*CURLIB"])]
    )
    return [
        ParameterSchema("FROMFILE", qual),
        ParameterSchema("TOFILE", qual),
        ParameterSchema("FROMMBR", SimpleSchema("NAME", ["*FIRST", "*ALL"]), default="*FIRST"),
        ParameterSchema("MBROPT", SimpleSchema("", ["*NONE", "*ADD", "*REPLACE"]), default="*NONE"),
        ParameterSchema("CRTFILE", SimpleSchema("", ["*NO", "*YES"]), default="*NO"),
        ParameterSchema(
            "INCCHAR",
            ElemSchema(
                [SimpleSchema(""), SimpleSchema("DEC"), SimpleSchema(""), SimpleSchema("CHAR")]
            ),
        ),
    ]
