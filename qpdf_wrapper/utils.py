"""Utility helpers for qpdf-wrapper."""

from __future__ import annotations

import logging
import os
import shutil
from typing import Optional

_LOGGER = logging.getLogger("qpdf_wrapper")

EXECUTABLE_ENV_VAR = "QPDF_BINARY"
DEFAULT_EXECUTABLE = "qpdf"


def resolve_executable(executable: Optional[str] = None) -> str:
    """Return the qpdf executable to invoke.

    Precedence: the explicit *executable*, the ``QPDF_BINARY`` environment
    variable, ``qpdf`` found on ``PATH``, then the bare name ``qpdf``.
    """

    if executable:
        return executable

    configured = os.environ.get(EXECUTABLE_ENV_VAR)
    if configured:
        _LOGGER.debug("Using qpdf from %s: %s", EXECUTABLE_ENV_VAR, configured)
        return configured

    found = shutil.which(DEFAULT_EXECUTABLE)
    if found:
        _LOGGER.debug("Detected external tool: %s -> %s", DEFAULT_EXECUTABLE, found)
        return found
    return DEFAULT_EXECUTABLE


def format_inches(value: float) -> str:
    """Format a length in inches without trailing zeros (``8.5``, ``11``)."""

    return f"{value:.2f}".rstrip("0").rstrip(".")
