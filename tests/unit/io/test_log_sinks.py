"""Unit tests for log sink adapters."""

import io
import json
from pathlib import Path

from transim_core.ports.log import LogSinkProtocol, build_facade_log
from transim_io.log_sink import (
    CompositeLogSink,
    ConsoleLogSink,
    FileLogSink,
    InMemoryLogSink,
    NoopLogSink,
    build_log_sink,
)
from transim_schemas.events import FacadeEvent
from transim_schemas.logs import LogEntry
from transim_schemas.primitives import LogSinkType
from transim_schemas.settings import LoggingConfig, LogSinkConfig


def _entry(submission_id: int | None = 1) -> LogEntry:
    return build_facade_log(
        "2024-01-01T00:00:00.000Z",
        FacadeEvent.SUBMISSION_SUBMITTED,
        "Submitted submission 1",
        submission_id=submission_id,
        data={"subject": "demo"},
    )


def test_console_log_sink_writes_jsonl() -> None:
    """Ensure console sink writes one JSON object per line."""
    stream = io.StringIO()
    sink = ConsoleLogSink(stream=stream)

    sink.emit_log(_entry())
    sink.emit_log(_entry(None))

    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    payload = json.loads(lines[0])
    assert payload["event"] == "submission_submitted"
    assert payload["level"] == "info"
    assert payload["submission_id"] == 1
    assert json.loads(lines[1])["submission_id"] is None


def test_file_log_sink_appends(tmp_path: Path) -> None:
    """Ensure file sink creates parents and appends entries."""
    path = tmp_path / "logs" / "facade.jsonl"
    sink = FileLogSink(path)

    sink.emit_log(_entry())
    sink.emit_log(_entry())

    assert sink.path == path
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert LogEntry.model_validate_json(lines[0]) == _entry()


def test_in_memory_log_sink_records_entries() -> None:
    """Ensure in-memory sink keeps entries in order."""
    sink = InMemoryLogSink()
    sink.emit_log(_entry())

    entries = sink.entries
    entries.clear()

    assert sink.events() == ["submission_submitted"]


def test_composite_log_sink_fans_out() -> None:
    """Ensure composite sink forwards to every sink."""
    first = InMemoryLogSink()
    second = InMemoryLogSink()
    sink = CompositeLogSink([first, NoopLogSink(), second])

    sink.emit_log(_entry())

    assert len(first.entries) == 1
    assert len(second.entries) == 1


def test_build_log_sink_single(tmp_path: Path) -> None:
    """Ensure a single configured sink is returned unwrapped."""
    config = LoggingConfig(
        sinks=[LogSinkConfig(type=LogSinkType.FILE, path=str(tmp_path / "a.jsonl"))]
    )

    sink = build_log_sink(config)

    assert isinstance(sink, FileLogSink)
    assert isinstance(sink, LogSinkProtocol)


def test_build_log_sink_composite() -> None:
    """Ensure multiple sinks are combined."""
    stream = io.StringIO()
    config = LoggingConfig(
        sinks=[
            LogSinkConfig(type=LogSinkType.CONSOLE),
            LogSinkConfig(type=LogSinkType.MEMORY),
        ]
    )

    sink = build_log_sink(config, stream=stream)
    sink.emit_log(_entry())

    assert isinstance(sink, CompositeLogSink)
    assert "submission_submitted" in stream.getvalue()
