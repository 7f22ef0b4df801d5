"""Log sink adapters for facade events."""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from transim_core.ports.log import LogSinkProtocol
from transim_schemas.logs import LogEntry
from transim_schemas.primitives import LogSinkType
from transim_schemas.settings import LoggingConfig


class CompositeLogSink(LogSinkProtocol):
    """Log sink that forwards entries to multiple sinks."""

    def __init__(self, sinks: Iterable[LogSinkProtocol]) -> None:
        """Initialize the composite log sink."""
        self._sinks = list(sinks)

    def emit_log(self, entry: LogEntry) -> None:
        """Forward log entries to each sink."""
        for sink in self._sinks:
            sink.emit_log(entry)


class ConsoleLogSink(LogSinkProtocol):
    """Log sink that writes JSONL entries to stderr."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize the console log sink.

        Args:
            stream: Output stream to write JSONL log entries.
        """
        self._stream = stream or sys.stderr

    def emit_log(self, entry: LogEntry) -> None:
        """Write log entry JSONL to the output stream."""
        payload = entry.model_dump_json(exclude_none=False)
        self._stream.write(payload + "\n")
        self._stream.flush()


class FileLogSink(LogSinkProtocol):
    """Log sink that appends JSONL entries to a file."""

    def __init__(self, path: Path) -> None:
        """Initialize the file log sink.

        Args:
            path: JSONL file; parent directories are created on first write.
        """
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        """Path of the JSONL file."""
        return self._path

    def emit_log(self, entry: LogEntry) -> None:
        """Append a log entry to the JSONL file."""
        payload = entry.model_dump_json(exclude_none=False)
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(payload + "\n")


class InMemoryLogSink(LogSinkProtocol):
    """Log sink that keeps entries in memory."""

    def __init__(self) -> None:
        """Initialize an empty in-memory log sink."""
        self._entries: list[LogEntry] = []
        self._lock = threading.Lock()

    @property
    def entries(self) -> list[LogEntry]:
        """Copy of the recorded entries."""
        with self._lock:
            return list(self._entries)

    def events(self) -> list[str]:
        """Return the event names of the recorded entries."""
        return [entry.event for entry in self.entries]

    def emit_log(self, entry: LogEntry) -> None:
        """Record a log entry."""
        with self._lock:
            self._entries.append(entry)


class NoopLogSink(LogSinkProtocol):
    """Log sink that drops all log entries."""

    def emit_log(self, entry: LogEntry) -> None:
        """Ignore log entries."""
        return None


def build_log_sink(
    logging_config: LoggingConfig,
    *,
    stream: TextIO | None = None,
) -> LogSinkProtocol:
    """Build a log sink from configuration.

    Args:
        logging_config: Logging configuration.
        stream: Optional stream for console logging.

    Returns:
        LogSinkProtocol: Configured log sink.

    Raises:
        ValueError: If an unsupported log sink type is configured.
    """
    sinks: list[LogSinkProtocol] = []
    for sink_config in logging_config.sinks:
        if sink_config.type == LogSinkType.FILE and sink_config.path is not None:
            sinks.append(FileLogSink(Path(sink_config.path)))
        elif sink_config.type == LogSinkType.CONSOLE:
            sinks.append(ConsoleLogSink(stream=stream))
        elif sink_config.type == LogSinkType.MEMORY:
            sinks.append(InMemoryLogSink())
        elif sink_config.type == LogSinkType.NOOP:
            sinks.append(NoopLogSink())
        else:
            raise ValueError(f"Unsupported log sink type: {sink_config.type}")

    if len(sinks) == 1:
        return sinks[0]
    return CompositeLogSink(sinks)
