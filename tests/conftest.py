"""Shared fixtures for Reflection Helper tests."""

import pytest

from reflection_helper.accessor import ReflectionHelper, readonly
from reflection_helper.diagnostics import DiagnosticsConfig, DiagnosticsSink


@pytest.fixture(autouse=True)
def isolated_process_state(tmp_path, monkeypatch):
    """Run each test in its own working directory with fresh process-wide state."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(DiagnosticsSink, "_instance", None)
    monkeypatch.setattr(readonly, "_lifted", set())


@pytest.fixture
def sink(tmp_path):
    return DiagnosticsSink(DiagnosticsConfig(directory=tmp_path / "logs"))


@pytest.fixture
def helper(sink):
    return ReflectionHelper(sink=sink)


@pytest.fixture
def log_lines(sink):
    """Callable returning the current lines of the test sink's file."""

    def _read():
        return sink.path.read_text(encoding="utf-8").splitlines()

    return _read
