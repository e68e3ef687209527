from __future__ import annotations

import logging

import pytest

from qpdf_wrapper import planner
from qpdf_wrapper.exceptions import EngineInvocationFailure, EngineUnavailable
from qpdf_wrapper.types import EngineResult, ExitCode, FileRange, Rotation


def test_query_args() -> None:
    assert planner.version_args() == ["--version"]
    assert planner.check_args("a.pdf") == ["--check", "a.pdf"]
    assert planner.page_count_args("a.pdf") == ["--show-npages", "a.pdf"]
    assert planner.json_args("a.pdf") == ["a.pdf", "--json"]


def test_rotate_args_pass_range_verbatim() -> None:
    assert planner.rotate_args("a.pdf", Rotation.RIGHT, "2") == [
        "a.pdf",
        "--rotate=+90:2",
        "--",
        "--replace-input",
    ]
    assert planner.rotate_args("a.pdf", Rotation.UP, "1-z") == [
        "a.pdf",
        "--rotate=-180:1-z",
        "--",
        "--replace-input",
    ]


def test_trim_args() -> None:
    assert planner.trim_args("a.pdf", "3,4") == ["a.pdf", "--pages", ".", "3,4", "--", "--replace-input"]
    assert planner.trim_args("a.pdf", 2) == ["a.pdf", "--pages", ".", "2", "--", "--replace-input"]


def test_combine_args_preserve_entry_order() -> None:
    entries = [("a.pdf", "1"), FileRange("b.pdf", "1-2"), ["c.pdf", "2-4"]]

    assert planner.combine_args(entries, "out.pdf") == [
        "--empty",
        "--pages",
        "a.pdf", "1",
        "b.pdf", "1-2",
        "c.pdf", "2-4",
        "--",
        "out.pdf",
    ]


def test_combine_args_whole_document_entries() -> None:
    entries = [("a.pdf",), "b.pdf", ("c.pdf", "3-5")]

    assert planner.combine_args(entries, "out.pdf") == [
        "--empty", "--pages", "a.pdf", "b.pdf", "c.pdf", "3-5", "--", "out.pdf",
    ]


def test_combine_args_require_entries() -> None:
    with pytest.raises(ValueError):
        planner.combine_args([], "out.pdf")


def test_copy_args_join_resolved_pages() -> None:
    assert planner.copy_args("a.pdf", "out.pdf", [2, 4]) == [
        "--empty", "--pages", "a.pdf", "2,4", "--", "out.pdf",
    ]
    with pytest.raises(ValueError):
        planner.copy_args("a.pdf", "out.pdf", [])


def test_plan_removal_keeps_complement() -> None:
    assert planner.plan_removal([2, 3, 4], 4) == [1]
    assert planner.plan_removal([], 3) == [1, 2, 3]
    with pytest.raises(ValueError):
        planner.plan_removal([1, 2], 2)


def test_remove_args() -> None:
    assert planner.remove_args("a.pdf", [1, 3]) == [
        "a.pdf", "--pages", "a.pdf", "1,3", "--", "--replace-input",
    ]


def test_stamp_args_with_pages() -> None:
    assert planner.stamp_args("doc.pdf", "stamp.pdf", [1, 2]) == [
        "doc.pdf", "--overlay", "stamp.pdf", "--to=1,2", "--", "--replace-input",
    ]


def test_stamp_args_whole_document() -> None:
    assert planner.stamp_args("doc.pdf", "stamp.pdf") == [
        "doc.pdf", "--overlay", "stamp.pdf", "--repeat=1", "--", "--replace-input",
    ]


def test_stamp_args_reject_empty_selection() -> None:
    with pytest.raises(ValueError):
        planner.stamp_args("doc.pdf", "stamp.pdf", [])


def _result(status: int, stderr: bytes = b"") -> EngineResult:
    return EngineResult(args=["a.pdf"], exit_status=status, stderr=stderr)


def test_check_outcome_success() -> None:
    assert planner.check_outcome(_result(0)) is ExitCode.SUCCESS


def test_check_outcome_warning_is_soft_success(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="qpdf_wrapper.planner"):
        assert planner.check_outcome(_result(3, b"WARNING: damaged xref")) is ExitCode.WARNING
    assert "damaged xref" in caplog.text


def test_check_outcome_error_raises_with_diagnostics() -> None:
    with pytest.raises(EngineInvocationFailure) as excinfo:
        planner.check_outcome(_result(2, b"a.pdf: not a PDF file"))

    assert excinfo.value.exit_status == 2
    assert excinfo.value.diagnostics == "a.pdf: not a PDF file"
    assert excinfo.value.args_used == ["a.pdf"]
    assert "not a PDF file" in str(excinfo.value)


@pytest.mark.parametrize("status", [4, 127, -11])
def test_check_outcome_unrecognised_status_raises(status: int) -> None:
    with pytest.raises(EngineInvocationFailure) as excinfo:
        planner.check_outcome(_result(status))
    assert excinfo.value.exit_status == status


def test_check_outcome_non_invokable_raises_unavailable() -> None:
    with pytest.raises(EngineUnavailable):
        planner.check_outcome(_result(1, b"qpdf: command not found"))
