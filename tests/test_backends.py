from __future__ import annotations

import subprocess
from types import SimpleNamespace

import pytest

from qpdf_wrapper.backends import SubprocessRunner
from qpdf_wrapper.exceptions import EngineInvocationFailure, EngineUnavailable
from qpdf_wrapper.utils import resolve_executable


def test_runner_prepends_executable_and_captures_output(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_run(command, env, stdout, stderr, check, timeout):
        captured.update(command=command, check=check, timeout=timeout)
        return SimpleNamespace(returncode=3, stdout=b"4\n", stderr=b"WARNING: damaged")

    monkeypatch.setattr("qpdf_wrapper.backends.subprocess_backend.subprocess.run", fake_run)

    result = SubprocessRunner("/usr/bin/qpdf", timeout=5).run(["--show-npages", "a.pdf"])

    assert captured == {
        "command": ["/usr/bin/qpdf", "--show-npages", "a.pdf"],
        "check": False,
        "timeout": 5,
    }
    assert result.args == ["--show-npages", "a.pdf"]
    assert result.exit_status == 3
    assert result.output == "4\n"
    assert result.diagnostics == "WARNING: damaged"
    assert result.executable == "/usr/bin/qpdf"


def test_runner_missing_executable_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr("qpdf_wrapper.backends.subprocess_backend.subprocess.run", fake_run)

    with pytest.raises(EngineUnavailable) as excinfo:
        SubprocessRunner("missing-qpdf").run(["--version"])
    assert excinfo.value.executable == "missing-qpdf"


def test_runner_timeout_is_invocation_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs["timeout"])

    monkeypatch.setattr("qpdf_wrapper.backends.subprocess_backend.subprocess.run", fake_run)

    with pytest.raises(EngineInvocationFailure) as excinfo:
        SubprocessRunner("qpdf", timeout=0.5).run(["--check", "a.pdf"])
    assert excinfo.value.args_used == ["--check", "a.pdf"]


def test_resolve_executable_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QPDF_BINARY", "/env/qpdf")
    monkeypatch.setattr("qpdf_wrapper.utils.shutil.which", lambda name: "/path/qpdf")

    assert resolve_executable("/explicit/qpdf") == "/explicit/qpdf"
    assert resolve_executable() == "/env/qpdf"

    monkeypatch.delenv("QPDF_BINARY")
    assert resolve_executable() == "/path/qpdf"

    monkeypatch.setattr("qpdf_wrapper.utils.shutil.which", lambda name: None)
    assert resolve_executable() == "qpdf"
