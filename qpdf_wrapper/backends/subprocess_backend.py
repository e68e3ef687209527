"""Subprocess backend implementation for qpdf-wrapper."""

from __future__ import annotations

import logging
import subprocess
from typing import MutableMapping, Optional, Sequence

from ..exceptions import EngineInvocationFailure, EngineUnavailable
from ..types import EngineResult
from .base import EngineRunner

_LOGGER = logging.getLogger("qpdf_wrapper.engine")


class SubprocessRunner(EngineRunner):
    """Runner that executes qpdf through :func:`subprocess.run`.

    The executable is fixed at construction time. ``timeout`` and ``env`` are
    passed through to :func:`subprocess.run` unchanged.
    """

    def __init__(
        self,
        executable: str = "qpdf",
        *,
        timeout: Optional[float] = None,
        env: MutableMapping[str, str] | None = None,
    ) -> None:
        self.executable = executable
        self.timeout = timeout
        self.env = env

    def command(self, args: Sequence[str]) -> list[str]:
        return [self.executable, *(str(arg) for arg in args)]

    def run(self, args: Sequence[str]) -> EngineResult:
        command = self.command(args)
        _LOGGER.debug("Executing command: %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                env=self.env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            _LOGGER.error("qpdf timed out after %s seconds", exc.timeout)
            raise EngineInvocationFailure(
                f"qpdf timed out after {exc.timeout} seconds",
                args=command[1:],
            ) from exc
        except OSError as exc:
            _LOGGER.error("Failed to execute qpdf: %s", exc)
            raise EngineUnavailable(executable=self.executable) from exc

        _LOGGER.debug(
            "Command finished with exit code %s\nstdout: %s\nstderr: %s",
            completed.returncode,
            completed.stdout,
            completed.stderr,
        )
        return EngineResult(
            args=command[1:],
            exit_status=completed.returncode,
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
            executable=self.executable,
        )
