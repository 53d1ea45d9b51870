"""Tabular rendering of nested values.

    >>> print(render_table({"ids": [7, 42], "name": "job"}), end="")
    <BLANKLINE>
    ids  | 0   | 7 
         | 1   | 42
    name | job |   
"""

from .render import Grid, flatten, render_grid, render_table
from .value import (
    CYCLE,
    NULL,
    Mapping,
    Null,
    Record,
    Reference,
    Scalar,
    Sequence,
    Value,
    inspect_value,
)

__all__ = [
    "CYCLE",
    "NULL",
    "Grid",
    "Mapping",
    "Null",
    "Record",
    "Reference",
    "Scalar",
    "Sequence",
    "Value",
    "flatten",
    "inspect_value",
    "render_grid",
    "render_table",
]
