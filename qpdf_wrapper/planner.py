"""Argument builders for qpdf operations and exit status classification.

Every ``*_args`` function is pure: it returns the argument list to hand to an
:class:`~qpdf_wrapper.backends.EngineRunner` (the executable itself excluded)
and never runs anything.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from .exceptions import EngineInvocationFailure, EngineUnavailable
from .ranges import PageList, RangeExpression, complement, format_pages
from .types import EngineResult, ExitCode, FileRange, PathLike, Rotation

_LOGGER = logging.getLogger("qpdf_wrapper.planner")

REPLACE_INPUT = ["--", "--replace-input"]

FileRangeLike = Union[FileRange, PathLike, Sequence[object]]


def version_args() -> List[str]:
    return ["--version"]


def check_args(path: PathLike) -> List[str]:
    return ["--check", str(path)]


def page_count_args(path: PathLike) -> List[str]:
    return ["--show-npages", str(path)]


def json_args(path: PathLike) -> List[str]:
    return [str(path), "--json"]


def rotate_args(path: PathLike, rotation: Rotation, pages: RangeExpression) -> List[str]:
    """Rotate *pages* of *path* in place.

    The range is passed through verbatim since qpdf parses its own range
    syntax for ``--rotate``.
    """

    return [str(path), f"--rotate={rotation.value}:{pages}", *REPLACE_INPUT]


def trim_args(path: PathLike, pages: RangeExpression) -> List[str]:
    """Keep only *pages* of *path*, in place."""

    return [str(path), "--pages", ".", str(pages), *REPLACE_INPUT]


def flatten_entries(entries: Iterable[FileRangeLike]) -> List[str]:
    """Flatten file/range entries in input order, keeping each pair adjacent."""

    flattened: List[str] = []
    for entry in entries:
        flattened.extend(FileRange.coerce(entry).to_args())
    return flattened


def combine_args(entries: Iterable[FileRangeLike], output_path: PathLike) -> List[str]:
    """Build a new document from the selected pages of several documents."""

    selection = flatten_entries(entries)
    if not selection:
        raise ValueError("At least one source document is required")
    return ["--empty", "--pages", *selection, "--", str(output_path)]


def copy_args(path: PathLike, output_path: PathLike, pages: PageList) -> List[str]:
    """Copy resolved *pages* of *path* into a new document at *output_path*."""

    if not pages:
        raise ValueError(f"No pages of {path} selected for copying")
    return ["--empty", "--pages", str(path), format_pages(pages), "--", str(output_path)]


def plan_removal(pages: PageList, page_count: int) -> PageList:
    """Return the pages to keep when removing *pages* from the document."""

    keep = complement(pages, page_count)
    if not keep:
        raise ValueError("Cannot remove every page of a document")
    return keep


def remove_args(path: PathLike, keep_pages: PageList) -> List[str]:
    """Rewrite *path* in place keeping only *keep_pages*."""

    return [str(path), "--pages", str(path), format_pages(keep_pages), *REPLACE_INPUT]


def stamp_args(
    document_path: PathLike,
    stamp_path: PathLike,
    pages: Optional[PageList] = None,
) -> List[str]:
    """Overlay *stamp_path* onto *document_path* in place.

    With resolved *pages* the overlay targets exactly those pages; without,
    the first stamp page is repeated onto every page of the document.
    """

    if pages is None:
        target = ["--repeat=1"]
    else:
        if not pages:
            raise ValueError(f"No pages of {document_path} selected for stamping")
        target = [f"--to={format_pages(pages)}"]
    return [str(document_path), "--overlay", str(stamp_path), *target, *REPLACE_INPUT]


def check_outcome(result: EngineResult) -> ExitCode:
    """Classify *result* and raise unless it is a success or a warning."""

    outcome = ExitCode.classify(result.exit_status)
    if outcome is not None and outcome.is_successful:
        if outcome is ExitCode.WARNING:
            _LOGGER.warning("qpdf reported warnings: %s", result.diagnostics)
        return outcome

    if outcome is ExitCode.NON_INVOKABLE:
        _LOGGER.error("qpdf could not be invoked: %s", result.diagnostics)
        raise EngineUnavailable(
            f"Unable to invoke qpdf (exit status {result.exit_status}): {result.diagnostics}",
            executable=result.executable,
        )

    _LOGGER.error("qpdf failed with code %s: %s", result.exit_status, result.diagnostics)
    raise EngineInvocationFailure(
        exit_status=result.exit_status,
        diagnostics=result.diagnostics,
        args=result.args,
    )


__all__ = [
    "check_args",
    "check_outcome",
    "combine_args",
    "copy_args",
    "flatten_entries",
    "json_args",
    "page_count_args",
    "plan_removal",
    "remove_args",
    "rotate_args",
    "stamp_args",
    "trim_args",
    "version_args",
]
