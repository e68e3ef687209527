"""qpdf operations built around an :class:`~qpdf_wrapper.backends.EngineRunner`."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable, List, Optional, Union

from . import planner
from .backends.base import EngineRunner
from .backends.subprocess_backend import SubprocessRunner
from .exceptions import EngineInvocationFailure
from .ranges import PageList, RangeExpression, parse_range
from .schema import JsonSchema, page_sizes, schema_for_version
from .types import EngineResult, ExitCode, PageSize, PathLike, Rotation
from .utils import resolve_executable

_LOGGER = logging.getLogger("qpdf_wrapper.editor")

_VERSION_PATTERN = re.compile(r"version (\d+)\.")
_NUMBER_PATTERN = re.compile(r"\d+")


class PDFEditor:
    """High-level qpdf operations on PDF files.

    Range parsing and argument building happen locally; every operation then
    makes one or more blocking qpdf invocations through the runner. In-place
    operations rewrite the source file, so callers must serialise access to a
    given path themselves.
    """

    def __init__(
        self,
        runner: Optional[EngineRunner] = None,
        *,
        executable: Optional[str] = None,
    ) -> None:
        self.runner = runner or SubprocessRunner(resolve_executable(executable))
        self._version: Optional[int] = None

    def _run(self, args: List[str]) -> EngineResult:
        result = self.runner.run(args)
        planner.check_outcome(result)
        return result

    def qpdf_version(self) -> int:
        """Return the major version of the installed qpdf."""

        if self._version is None:
            result = self._run(planner.version_args())
            match = _VERSION_PATTERN.search(result.output)
            if not match:
                raise EngineInvocationFailure(
                    f"Unable to determine qpdf version from output: {result.output.strip()!r}",
                    exit_status=result.exit_status,
                    args=result.args,
                )
            self._version = int(match.group(1))
            _LOGGER.debug("Detected qpdf major version %s", self._version)
        return self._version

    def json_schema(self) -> JsonSchema:
        version = self.qpdf_version()
        schema = schema_for_version(version)
        _LOGGER.debug("Using qpdf JSON layout %s for qpdf %s", schema.name, version)
        return schema

    def is_pdf(self, path: PathLike) -> bool:
        """Return ``True`` when *path* is a PDF that qpdf can process.

        A file qpdf rejects gives ``False``; an engine that cannot run raises
        :class:`~qpdf_wrapper.exceptions.EngineUnavailable`.
        """

        result = self.runner.run(planner.check_args(path))
        outcome = ExitCode.classify(result.exit_status)
        if outcome is ExitCode.NON_INVOKABLE:
            planner.check_outcome(result)
        return outcome is not None and outcome.is_successful

    def page_count(self, path: PathLike) -> int:
        result = self._run(planner.page_count_args(path))
        match = _NUMBER_PATTERN.search(result.output)
        if not match:
            raise EngineInvocationFailure(
                f"Unable to read page count of {path} from qpdf output",
                exit_status=result.exit_status,
                args=result.args,
            )
        return int(match.group(0))

    def parse_range(self, pages: RangeExpression, path: Optional[PathLike] = None) -> PageList:
        """Resolve *pages*, against the page count of *path* when given.

        Example: ``'1,3,2,5-8,10-z'`` becomes ``[1, 2, 3, 5, 6, 7, 8, 10, 11, 12]``
        for a 12-page document. The end sentinel requires *path*.
        """

        page_count = self.page_count(path) if path is not None else None
        return parse_range(pages, page_count)

    def rotate(
        self,
        path: PathLike,
        direction: Union[Rotation, int, str],
        pages: RangeExpression,
    ) -> bool:
        rotation = Rotation.coerce(direction)
        self._run(planner.rotate_args(path, rotation, pages))
        _LOGGER.info("Rotated pages %s of %s by %s", pages, path, rotation.value)
        return True

    def trim_to_range(self, path: PathLike, pages: RangeExpression) -> bool:
        """Remove all pages but *pages*."""

        self._run(planner.trim_args(path, pages))
        _LOGGER.info("Trimmed %s to pages %s", path, pages)
        return True

    def combine_ranges_from_files(self, entries: Iterable[Any], output_path: PathLike) -> bool:
        """Combine pages from several documents into *output_path*.

        Each entry is a :class:`~qpdf_wrapper.types.FileRange`, a path, or a
        ``(path,)`` / ``(path, range)`` sequence. Omitting the range copies the
        whole document. Entry order determines output page order::

            [
                ("/path/to/first.pdf",),
                ("/path/to/second.pdf", "3-5"),
                "/path/to/third.pdf",
            ]
        """

        self._run(planner.combine_args(entries, output_path))
        _LOGGER.info("Combined pages into %s", output_path)
        return True

    def copy_pages(self, path: PathLike, output_path: PathLike, pages: RangeExpression) -> bool:
        resolved = self.parse_range(pages, path)
        self._run(planner.copy_args(path, output_path, resolved))
        _LOGGER.info("Copied pages %s of %s into %s", resolved, path, output_path)
        return True

    def remove_pages(self, path: PathLike, pages: RangeExpression) -> bool:
        """Remove *pages* from *path* by keeping the complement. Opposite of :meth:`trim_to_range`."""

        page_count = self.page_count(path)
        keep = planner.plan_removal(parse_range(pages, page_count), page_count)
        self._run(planner.remove_args(path, keep))
        _LOGGER.info("Removed pages %s from %s", pages, path)
        return True

    def json_info(self, path: PathLike) -> Any:
        result = self._run(planner.json_args(path))
        try:
            return json.loads(result.output)
        except ValueError as exc:
            raise EngineInvocationFailure(
                f"qpdf produced invalid JSON for {path}: {exc}",
                exit_status=result.exit_status,
                args=result.args,
            ) from exc

    def page_sizes(self, path: PathLike) -> List[Optional[PageSize]]:
        """Return ``(width, height)`` in inches per page, e.g. ``[(8.5, 11.0), (11.0, 8.5)]``."""

        info = self.json_info(path)
        return page_sizes(info, self.json_schema())

    def apply_stamp(
        self,
        document_path: PathLike,
        stamp_path: PathLike,
        pages: Optional[RangeExpression] = None,
    ) -> None:
        """Overlay *stamp_path* on *document_path*, on *pages* or on every page."""

        resolved = self.parse_range(pages, document_path) if pages is not None else None
        self._run(planner.stamp_args(document_path, stamp_path, resolved))
        _LOGGER.info("Stamped %s with %s", document_path, stamp_path)
