"""Flatten Value trees into string grids and render them as aligned text."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .value import Mapping, Null, Record, Reference, Scalar, Sequence, inspect_value

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .value import Value

Grid = list[list[str]]

NIL = "nil"


def _labelled(children: Iterable[tuple[str, Value]]) -> Grid:
    """Prefix each child's rows with its label; only the first row shows it."""
    grid: Grid = []
    for label, child in children:
        for row in flatten(child):
            grid.append([label, *row])
            label = ""
    return grid


def flatten(value: Value) -> Grid:
    """Recursively decompose a Value into rows of cells. Rows may be ragged."""
    match value:
        case Null(): return [[NIL]]
        case Reference(target=target): return flatten(target)
        case Sequence(items=items): return _labelled((str(i), v) for i, v in enumerate(items))
        case Mapping(entries=entries) | Record(fields=entries): return _labelled(entries)
        case Scalar(text=text): return [[text]]
        case _: raise TypeError(f"Not a table value: {type(value).__name__}")


def render_grid(grid: Grid, separator: str = " | ") -> str:
    """Column-align a ragged grid.

    Rows are padded with empty cells to the widest row, every cell is
    left-justified to its column width, and cells are joined by
    ``separator``. The result starts with a blank line; each row ends
    with a newline.
    """
    ncols = max((len(row) for row in grid), default=0)
    widths = [0] * ncols
    for row in grid:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    lines = [""]
    for row in grid:
        padded = row + [""] * (ncols - len(row))
        lines.append(separator.join(cell.ljust(w) for cell, w in zip(padded, widths)))
    return "\n".join(lines) + "\n"


def render_table(obj: Any, separator: str = " | ") -> str:
    """Render any object as an aligned table (see ``inspect_value`` for the mapping)."""
    return render_grid(flatten(inspect_value(obj)), separator)
