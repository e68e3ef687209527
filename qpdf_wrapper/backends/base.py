"""Backend protocol for engine invocations."""

from __future__ import annotations

from typing import Protocol, Sequence

from ..types import EngineResult


class EngineRunner(Protocol):
    """Protocol defining how qpdf is invoked.

    Runners only execute argument lists; they never interpret exit statuses.
    """

    executable: str

    def run(self, args: Sequence[str]) -> EngineResult:
        """Run the engine with *args* and return the captured result."""
