"""Tests for the tabular renderer.

Validates:
- Value model construction from host objects
- Label-spanning row expansion for sequences, mappings and records
- Column alignment and ragged-row padding
"""

from __future__ import annotations

import gc
import weakref
from dataclasses import dataclass, field
from typing import NamedTuple

from pydantic import BaseModel

from devlog import DevlogConfig, DevLogger
from devlog.tabular import (
    CYCLE,
    NULL,
    Mapping,
    Record,
    Reference,
    Scalar,
    Sequence,
    flatten,
    inspect_value,
    render_grid,
    render_table,
)


@dataclass
class Pair:
    label: str
    items: list[int] = field(default_factory=list)


class Point(NamedTuple):
    y: int
    x: int


class Account(BaseModel):
    name: str
    active: bool = True


class Node:
    pass


# ═════════════════════════════════════════════════════════════════════════════
# Introspection
# ═════════════════════════════════════════════════════════════════════════════


def test_inspect_scalars() -> None:
    """Strings, numbers and unknown objects become Scalars; None becomes Null."""
    assert inspect_value(None) == NULL
    assert inspect_value("abc") == Scalar("abc")
    assert inspect_value(3.5) == Scalar("3.5")
    assert inspect_value(True) == Scalar("True")
    assert inspect_value(b"hi") == Scalar("b'hi'")


def test_inspect_containers() -> None:
    """Lists, dicts and records map onto their variants."""
    assert inspect_value([1, None]) == Sequence((Scalar("1"), NULL))
    assert inspect_value({"b": 2, "a": 1}) == Mapping((("a", Scalar("1")), ("b", Scalar("2"))))
    assert inspect_value(Point(y=1, x=2)) == Record((("y", Scalar("1")), ("x", Scalar("2"))))
    assert inspect_value(Account(name="ann")) == Record((("name", Scalar("ann")), ("active", Scalar("True"))))


def test_inspect_weakref() -> None:
    """Live weak references are transparent; dead ones are Null."""
    target = Pair("a")
    ref = weakref.ref(target)
    assert inspect_value(ref) == Reference(inspect_value(target))

    del target
    gc.collect()
    assert inspect_value(ref) == NULL


def test_inspect_cycle() -> None:
    """Self-containing values stop at the cycle instead of recursing forever."""
    items: list[object] = [1]
    items.append(items)
    assert inspect_value(items) == Sequence((Scalar("1"), CYCLE))


def test_inspect_shared_value_is_not_cycle() -> None:
    """The same object appearing twice side by side is rendered twice."""
    shared = [1]
    assert inspect_value([shared, shared]) == Sequence((Sequence((Scalar("1"),)),) * 2)


def test_inspect_broken_str() -> None:
    """A failing __str__ degrades to a marker cell."""
    class Broken:
        def __str__(self) -> str:
            raise RuntimeError("nope")

    value = inspect_value(Broken())
    assert isinstance(value, Scalar)
    assert "str() failed: nope" in value.text


def test_inspect_plain_object_is_scalar() -> None:
    node = Node()
    assert inspect_value(node) == Scalar(str(node))


# ═════════════════════════════════════════════════════════════════════════════
# Flattening
# ═════════════════════════════════════════════════════════════════════════════


def test_flatten_null_and_reference() -> None:
    assert flatten(NULL) == [["nil"]]
    assert flatten(Reference(Scalar("x"))) == [["x"]]
    assert flatten(Reference(NULL)) == [["nil"]]


def test_flatten_sequence_labels_first_row_only() -> None:
    """Nested rows carry the index once, then blank labels."""
    grid = flatten(inspect_value([[1, 2], 3]))
    assert grid == [["0", "0", "1"], ["", "1", "2"], ["1", "3"]]


def test_flatten_record_keeps_declaration_order() -> None:
    grid = flatten(inspect_value(Point(y=9, x=8)))
    assert grid == [["y", "9"], ["x", "8"]]


def test_flatten_empty_container() -> None:
    assert flatten(inspect_value([])) == []
    assert flatten(inspect_value({})) == []


# ═════════════════════════════════════════════════════════════════════════════
# Rendering
# ═════════════════════════════════════════════════════════════════════════════


def test_render_list() -> None:
    assert render_table([1, 2, 3]) == "\n0 | 1\n1 | 2\n2 | 3\n"


def test_render_map_sorted_keys() -> None:
    assert render_table({"b": 2, "a": 1}) == "\na | 1\nb | 2\n"


def test_render_map_non_string_keys_sort_by_text() -> None:
    """Keys sort by their string form, so 10 comes before 9."""
    assert render_table({9: "x", 10: "y"}) == "\n10 | y\n9  | x\n"


def test_render_nested_record() -> None:
    """Field label on the first of the array's rows, blank on the second."""
    out = render_table(Pair("ab", [1, 2]))
    assert out == (
        "\n"
        "label | ab |  \n"
        "items | 0  | 1\n"
        "      | 1  | 2\n"
    )


def test_render_empty_is_blank_line() -> None:
    assert render_table([]) == "\n"
    assert render_grid([]) == "\n"


def test_render_ragged_grid_uniform_columns() -> None:
    """Short rows are padded so every line has the same column count."""
    out = render_grid([["a"], ["bb", "c", "ddd"]])
    lines = out.split("\n")[1:-1]
    assert lines == ["a  |   |    ", "bb | c | ddd"]
    assert {line.count("|") for line in lines} == {2}


def test_render_custom_separator() -> None:
    assert render_table(["x", "y"], separator=",") == "\n0,x\n1,y\n"


def test_render_is_deterministic() -> None:
    value = {"z": [Pair("q", [3])], "a": {"k": None}}
    assert render_table(value) == render_table(value)


def test_render_set_ordered_by_text() -> None:
    assert render_table({"b", "a"}) == "\n0 | a\n1 | b\n"


# ═════════════════════════════════════════════════════════════════════════════
# Logger Integration
# ═════════════════════════════════════════════════════════════════════════════


def test_logger_table_disabled_returns_empty() -> None:
    log = DevLogger(DevlogConfig(enabled=False))
    assert log.table([1, 2]) == ""


def test_logger_table_uses_configured_separator() -> None:
    log = DevLogger(DevlogConfig(table_separator=" : "))
    assert log.table([5]) == "\n0 : 5\n"
