from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Sequence

import pytest
from pypdf import PdfWriter
from pypdf.generic import DecodedStreamObject, DictionaryObject, NameObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from qpdf_wrapper.types import EngineResult


class FakeRunner:
    """Runner double recording argument lists and replaying queued results."""

    def __init__(self, executable: str = "qpdf") -> None:
        self.executable = executable
        self.calls: List[List[str]] = []
        self._responses: List[tuple[int, bytes, bytes]] = []

    def queue(self, exit_status: int = 0, stdout: str | bytes = b"", stderr: str | bytes = b"") -> "FakeRunner":
        if isinstance(stdout, str):
            stdout = stdout.encode()
        if isinstance(stderr, str):
            stderr = stderr.encode()
        self._responses.append((exit_status, stdout, stderr))
        return self

    def run(self, args: Sequence[str]) -> EngineResult:
        self.calls.append(list(args))
        exit_status, stdout, stderr = self._responses.pop(0) if self._responses else (0, b"", b"")
        return EngineResult(
            args=list(args),
            exit_status=exit_status,
            stdout=stdout,
            stderr=stderr,
            executable=self.executable,
        )


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, pages: int = 1, width: float = 612, height: float = 792) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=width, height=height)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def one_page_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("one_page.pdf", pages=1)


@pytest.fixture()
def two_page_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("two_pages.pdf", pages=2)


@pytest.fixture()
def three_page_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("three_pages.pdf", pages=3)


@pytest.fixture()
def four_page_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("four_pages.pdf", pages=4)


STAMP_MARKER = b"QPDF-WRAPPER-STAMP"


@pytest.fixture()
def stamp_marker() -> bytes:
    return STAMP_MARKER


@pytest.fixture()
def stamp_pdf(tmp_path: Path) -> Path:
    """One page whose content stream draws :data:`STAMP_MARKER` as text."""
    path = tmp_path / "stamp.pdf"
    writer = PdfWriter()
    page = writer.add_blank_page(width=612, height=792)
    font = DictionaryObject({
        NameObject("/Type"): NameObject("/Font"),
        NameObject("/Subtype"): NameObject("/Type1"),
        NameObject("/BaseFont"): NameObject("/Helvetica"),
    })
    page[NameObject("/Resources")] = DictionaryObject({
        NameObject("/Font"): DictionaryObject({NameObject("/F1"): font}),
    })
    content = DecodedStreamObject()
    content.set_data(b"BT /F1 24 Tf 72 720 Td (" + STAMP_MARKER + b") Tj ET")
    page[NameObject("/Contents")] = writer._add_object(content)
    with path.open("wb") as handle:
        writer.write(handle)
    return path


@pytest.fixture()
def not_a_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "small.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0not really a pdf")
    return path
