"""
qpdf-wrapper - A thin Python facade over the qpdf command-line tool.

This library parses page range expressions and turns them into qpdf
invocations for common PDF maintenance tasks: counting, rotating, trimming,
combining, copying, removing and stamping pages.

Quick Start:
    >>> from qpdf_wrapper import PDFEditor, Rotation
    >>> editor = PDFEditor()
    >>> editor.page_count('input.pdf')
    4
    >>> editor.rotate('input.pdf', Rotation.RIGHT, '2-z')
    True

Main Classes:
    - PDFEditor: Runs qpdf operations on PDF files
    - SubprocessRunner: Invokes the qpdf executable

Data Classes:
    - Rotation: Rotation directions accepted by qpdf
    - ExitCode: qpdf exit statuses
    - FileRange: Source document and page range for combining
    - EngineResult: Captured result of a qpdf invocation

Exceptions:
    - QpdfWrapperError: Base exception
    - RangeSyntaxError: Malformed page range or rotation
    - MissingContextError: End sentinel used without a document
    - EngineInvocationFailure: qpdf exited with a fatal status
    - EngineUnavailable: qpdf could not be started

For CLI usage, use the 'pdfq' command after installation.
"""

# Core classes
from qpdf_wrapper.editor import PDFEditor
from qpdf_wrapper.backends import EngineRunner, SubprocessRunner

# Data types
from qpdf_wrapper.types import EngineResult, ExitCode, FileRange, Rotation

# Exceptions
from qpdf_wrapper.exceptions import (
    QpdfWrapperError,
    RangeSyntaxError,
    MissingContextError,
    EngineInvocationFailure,
    EngineUnavailable,
)

# Range helpers
from qpdf_wrapper.ranges import complement, format_pages, parse_range

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Main classes
    "PDFEditor",
    "EngineRunner",
    "SubprocessRunner",
    # Data types
    "EngineResult",
    "ExitCode",
    "FileRange",
    "Rotation",
    # Exceptions
    "QpdfWrapperError",
    "RangeSyntaxError",
    "MissingContextError",
    "EngineInvocationFailure",
    "EngineUnavailable",
    # Range helpers
    "complement",
    "format_pages",
    "parse_range",
    # Version info
    "__version__",
]
