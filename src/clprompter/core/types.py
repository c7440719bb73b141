"""
Core type definitions for clprompter.

This module contains the type aliases shared by the decomposer, the reassembler
and their callers.
"""

# A decomposed parameter value: a leaf string, or the parts of a QUAL/ELEM
# value, or the instances of a multi-instance parameter.
FormValue = str | list["FormValue"]

# Parameter keyword -> value as the user edited it in the form
FormValues = dict[str, FormValue]

# Parameter keyword -> declared default text
DefaultsMap = dict[str, str]
