"""
Custom exceptions for qpdf-wrapper.

Range errors are raised before the engine is invoked. Engine errors are
raised after an invocation and carry the engine's captured diagnostics.
"""

from typing import Optional, Sequence


class QpdfWrapperError(Exception):
    """Base exception for all qpdf-wrapper errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown qpdf-wrapper error occurred."


class RangeSyntaxError(QpdfWrapperError, ValueError):
    """Raised when a page range token or rotation value cannot be parsed."""

    @property
    def default_message(self) -> str:
        return "Invalid page range specification."


class MissingContextError(QpdfWrapperError, ValueError):
    """Raised when the end-of-document sentinel is used without a page count."""

    @property
    def default_message(self) -> str:
        return "The end-of-document sentinel requires a document to resolve against."


class EngineInvocationFailure(QpdfWrapperError):
    """
    Raised when qpdf exits with a fatal status.

    For in-place operations the target file must be treated as undefined
    after this error.
    """

    def __init__(
        self,
        message: str = "",
        *,
        exit_status: Optional[int] = None,
        diagnostics: str = "",
        args: Sequence[str] = (),
    ) -> None:
        self.exit_status = exit_status
        self.diagnostics = diagnostics
        self.args_used = list(args)
        if not message and exit_status is not None:
            message = f"qpdf exited with status {exit_status}"
            if diagnostics:
                message = f"{message}: {diagnostics}"
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "qpdf failed to process the document."


class EngineUnavailable(QpdfWrapperError):
    """Raised when the qpdf executable cannot be started."""

    def __init__(self, message: str = "", *, executable: Optional[str] = None) -> None:
        self.executable = executable
        if not message and executable:
            message = f"Unable to invoke qpdf executable: {executable}"
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Unable to invoke qpdf."
