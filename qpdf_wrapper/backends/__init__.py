"""Backend abstractions for qpdf-wrapper."""

from .base import EngineRunner
from .subprocess_backend import SubprocessRunner

__all__ = [
    "EngineRunner",
    "SubprocessRunner",
]
