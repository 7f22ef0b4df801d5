"""transim-io: Log sink adapters."""

from transim_io.log_sink import (
    CompositeLogSink,
    ConsoleLogSink,
    FileLogSink,
    InMemoryLogSink,
    NoopLogSink,
    build_log_sink,
)

__version__ = "0.1.0"

__all__ = [
    "CompositeLogSink",
    "ConsoleLogSink",
    "FileLogSink",
    "InMemoryLogSink",
    "NoopLogSink",
    "build_log_sink",
]
