"""
Type definitions and dataclasses for qpdf-wrapper.

This module defines the enums and data structures shared by the range
resolver, the operation planner and the engine backends.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .exceptions import RangeSyntaxError

PathLike = Union[str, Path]
PageSize = Tuple[float, float]

_ANGLE_PATTERN = re.compile(r"^[+-]?\d+$")


class Rotation(str, Enum):
    """Page rotation accepted by ``qpdf --rotate``, valued as a signed angle."""

    RIGHT = "+90"
    LEFT = "-90"
    DOWN = "+180"
    UP = "-180"

    @classmethod
    def from_angle(cls, value: Union[int, str]) -> "Rotation":
        """Return the rotation for a signed angle of 90, -90, 180 or -180.

        Only whole angles are accepted: an ``int`` (not ``bool``) or a string
        of digits with an optional sign. Fractional values are rejected rather
        than truncated.
        """

        if isinstance(value, str) and _ANGLE_PATTERN.match(value.strip()):
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int) or value not in _ANGLES:
            raise RangeSyntaxError(f"Invalid rotation value: {value}")
        return _ANGLES[value]

    @classmethod
    def from_cardinal(cls, value: str) -> "Rotation":
        """Return the rotation for ``right``, ``left``, ``down`` or ``up``."""

        try:
            return _CARDINALS[value.strip().lower()]
        except (KeyError, AttributeError):
            raise RangeSyntaxError(f"Invalid rotation value: {value}") from None

    @classmethod
    def coerce(cls, value: Union["Rotation", int, str]) -> "Rotation":
        """Accept a :class:`Rotation`, a signed angle or a cardinal name."""

        if isinstance(value, Rotation):
            return value
        if isinstance(value, int):
            return cls.from_angle(value)
        text = str(value).strip()
        if _ANGLE_PATTERN.match(text):
            return cls.from_angle(text)
        return cls.from_cardinal(text)

    @property
    def angle(self) -> int:
        return int(self.value)


_ANGLES = {
    90: Rotation.RIGHT,
    -90: Rotation.LEFT,
    180: Rotation.DOWN,
    -180: Rotation.UP,
}

_CARDINALS = {
    "right": Rotation.RIGHT,
    "left": Rotation.LEFT,
    "down": Rotation.DOWN,
    "up": Rotation.UP,
}


class ExitCode(int, Enum):
    """Exit statuses documented by qpdf."""

    # no errors or warnings
    SUCCESS = 0
    # not used by qpdf, but the shell may return it when qpdf cannot be run
    NON_INVOKABLE = 1
    # errors detected
    ERROR = 2
    # warnings detected, unless --warning-exit-0 is given
    WARNING = 3

    @classmethod
    def classify(cls, status: int) -> Optional["ExitCode"]:
        """Return the matching member, or ``None`` for unrecognised statuses."""

        try:
            return cls(status)
        except ValueError:
            return None

    @property
    def is_successful(self) -> bool:
        """Many PDFs are not completely valid but can still be processed."""

        return self in (ExitCode.SUCCESS, ExitCode.WARNING)


@dataclass(frozen=True)
class FileRange:
    """
    A source document and the pages to take from it.

    Attributes:
        path: Path to the source document
        pages: Page range expression, or ``None`` for the whole document
    """
    path: PathLike
    pages: Optional[Union[str, int]] = None

    @classmethod
    def coerce(cls, entry: Union["FileRange", PathLike, Sequence[object]]) -> "FileRange":
        """Build a :class:`FileRange` from ``path``, ``(path,)`` or ``(path, range)``."""

        if isinstance(entry, FileRange):
            return entry
        if isinstance(entry, (str, Path)):
            return cls(entry)
        items = list(entry)
        if len(items) == 1:
            return cls(items[0])  # type: ignore[arg-type]
        if len(items) == 2:
            return cls(items[0], items[1])  # type: ignore[arg-type]
        raise ValueError(f"Expected (path) or (path, range), got {entry!r}")

    def to_args(self) -> List[str]:
        if self.pages is None or str(self.pages).strip() == "":
            return [str(self.path)]
        return [str(self.path), str(self.pages)]


@dataclass
class EngineResult:
    """
    Result of a single engine invocation.

    Attributes:
        args: Arguments passed to the engine, executable excluded
        exit_status: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """
    args: List[str]
    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""
    executable: str = field(default="qpdf")

    @property
    def output(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @property
    def diagnostics(self) -> str:
        """Captured stderr, falling back to stdout when stderr is empty."""

        text = self.stderr.decode("utf-8", errors="replace").strip()
        return text or self.output.strip()

    def __str__(self) -> str:
        return f"EngineResult(exit_status={self.exit_status}, args={self.args!r})"
