"""Unit tests for crash reports."""

import io
import re
import sys
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from types import TracebackType

import pytest
from rich.console import Console

from westwood import crashlog

METADATA = crashlog.ProgramMetadata(
    package="westwood",
    binary="westwood",
    version="1.2.3",
    repository="https://example.invalid/westwood",
    authors="Jane Doe <jane@example.invalid>",
)


def raise_and_capture() -> tuple[type[BaseException], BaseException, TracebackType | None]:
    try:
        raise RuntimeError("Boo!")
    except RuntimeError as exc:
        return type(exc), exc, exc.__traceback__


class Recorder:
    def __init__(self) -> None:
        self.calls: list[BaseException] = []

    def __call__(self, exc_type: type[BaseException], exc: BaseException, tb: TracebackType | None) -> None:
        self.calls.append(exc)


class TestGenerateReport:
    def test_report_contents(self, tmp_path: Path) -> None:
        timestamp = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        path = crashlog.generate_report(METADATA, *raise_and_capture(), timestamp, tmp_path)

        assert path is not None
        assert path.parent == tmp_path
        assert re.fullmatch(r"[0-9a-f]{16}\.txt", path.name)

        lines = path.read_text(encoding="utf-8").split("\n")
        assert lines[:4] == ["Package: westwood", "Binary: westwood", "Version: 1.2.3", ""]
        assert lines[4].startswith("Architecture: ")
        assert lines[5].startswith("Operating system: ")
        assert lines[6] == "Timestamp: 2025-01-02T03:04:05+00:00"
        assert lines[7] == ""
        assert lines[8] == "Message: Boo!"
        assert lines[9].startswith("Source location: ")
        assert "crashlog_test.py:" in lines[9]
        assert lines[10] == ""
        assert lines[11] == "Traceback (most recent call last):"

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"
        timestamp = datetime.now(UTC)
        assert crashlog.generate_report(METADATA, *raise_and_capture(), timestamp, missing) is None


class TestInstall:
    @pytest.fixture
    def previous_hook(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Recorder:
        recorder = Recorder()
        monkeypatch.setattr(sys, "excepthook", recorder)
        monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
        return recorder

    def test_replaces_previous_hook(self, previous_hook: Recorder, tmp_path: Path) -> None:
        output = io.StringIO()
        crashlog.install(METADATA, console=Console(file=output, width=200))
        sys.excepthook(*raise_and_capture())

        assert previous_hook.calls == []
        reports = list(tmp_path.glob("*.txt"))
        assert len(reports) == 1
        message = output.getvalue()
        assert "Uh oh! Westwood crashed." in message
        assert str(reports[0]) in message
        assert "https://example.invalid/westwood/issues/new" in message

    def test_returns_installed_hook(self, previous_hook: Recorder, tmp_path: Path) -> None:
        hook = crashlog.install(METADATA, console=Console(file=io.StringIO()))
        assert hook is sys.excepthook
        hook(*raise_and_capture())
        assert len(list(tmp_path.glob("*.txt"))) == 1

    def test_appends_to_previous_hook(self, previous_hook: Recorder) -> None:
        output = io.StringIO()
        crashlog.install(METADATA, replace=False, console=Console(file=output, width=200))
        sys.excepthook(*raise_and_capture())

        assert len(previous_hook.calls) == 1
        assert "---" in output.getvalue()

    def test_falls_back_when_report_fails(self, previous_hook: Recorder, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(crashlog, "generate_report", lambda *args: None)
        output = io.StringIO()
        crashlog.install(METADATA, console=Console(file=output, width=200))
        sys.excepthook(*raise_and_capture())

        assert len(previous_hook.calls) == 1
        assert output.getvalue() == ""

    def test_keyboard_interrupt_uses_previous_hook(self, previous_hook: Recorder, tmp_path: Path) -> None:
        crashlog.install(METADATA, console=Console(file=io.StringIO()))
        interrupt = KeyboardInterrupt()
        sys.excepthook(KeyboardInterrupt, interrupt, None)

        assert previous_hook.calls == [interrupt]
        assert list(tmp_path.glob("*.txt")) == []
