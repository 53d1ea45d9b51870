"""Call-site lookup for debug lines.

The emitter asks a LocationProvider for the file, line and function of the
code that called a logging entry point. FrameLocator walks the interpreter
stack; FixedLocator returns a constant and exists for deterministic tests.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


@dataclass(frozen=True, slots=True)
class CallerInfo:
    """Resolved call site. Empty strings and line 0 mean unknown."""

    file: str = ""
    line: int = 0
    function: str = ""

    @property
    def location(self) -> str:
        """``file:line`` as shown in a debug line."""
        return f"{self.file}:{self.line}"


UNKNOWN = CallerInfo()


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for call-site lookup. ``skip=0`` is the caller of ``locate``."""

    def locate(self, skip: int) -> CallerInfo: ...


def default_source_roots() -> tuple[Path, ...]:
    """Interpreter import path entries, in search order."""
    return tuple(Path(p) for p in sys.path if p)


def shorten_path(file: str, roots: Iterable[Path]) -> str:
    """Rewrite ``file`` relative to the first root containing it; else unchanged."""
    path = Path(file)
    if not path.is_absolute():
        return file
    for root in roots:
        if path.is_relative_to(root):
            return path.relative_to(root).as_posix()
    return file


def _short_function(qualname: str) -> str:
    # Nested functions drop their enclosing "outer.<locals>." prefix.
    return qualname.rpartition("<locals>.")[2]


@dataclass(slots=True)
class FrameLocator:
    """Stack-walking provider.

    ``roots`` is called on every lookup so the host can change its source
    roots between calls.
    """

    roots: Callable[[], Iterable[Path]] = default_source_roots

    def locate(self, skip: int) -> CallerInfo:
        try:
            frame = sys._getframe(skip + 1)
        except (ValueError, AttributeError):
            return UNKNOWN
        code = frame.f_code
        name = getattr(code, "co_qualname", code.co_name)
        return CallerInfo(shorten_path(code.co_filename, self.roots()), frame.f_lineno or 0, _short_function(name))


@dataclass(frozen=True, slots=True)
class FixedLocator:
    """Provider that always reports the same call site."""

    info: CallerInfo = field(default_factory=lambda: CallerInfo("app.py", 1, "main"))

    def locate(self, skip: int) -> CallerInfo:
        return self.info
