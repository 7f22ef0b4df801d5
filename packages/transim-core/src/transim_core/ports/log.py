"""Protocol definitions and log builders for structured facade logging."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol, runtime_checkable

from transim_schemas.events import FacadeEvent
from transim_schemas.logs import LogEntry
from transim_schemas.primitives import JsonValue, LogLevel, SubmissionId, Timestamp

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@runtime_checkable
class LogSinkProtocol(Protocol):
    """Protocol for emitting JSONL log entries."""

    def emit_log(self, entry: LogEntry) -> None:
        """Emit a log entry."""
        raise NotImplementedError


def format_timestamp(epoch_ms: int) -> Timestamp:
    """Format epoch milliseconds as an ISO-8601 UTC timestamp.

    Args:
        epoch_ms: Milliseconds since the epoch.

    Returns:
        Timestamp: Timestamp with millisecond precision and ``Z`` suffix.
    """
    moment = EPOCH + timedelta(milliseconds=epoch_ms)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_facade_log(
    timestamp: Timestamp,
    event: FacadeEvent,
    message: str,
    *,
    submission_id: SubmissionId | None = None,
    level: LogLevel = LogLevel.INFO,
    data: dict[str, JsonValue] | None = None,
) -> LogEntry:
    """Build a log entry for a facade operation.

    Args:
        timestamp: ISO-8601 timestamp.
        event: Facade event name.
        message: Human readable message.
        submission_id: Submission the event refers to, if any.
        level: Log level.
        data: Structured event data.

    Returns:
        LogEntry: Structured facade log entry.
    """
    return LogEntry(
        timestamp=timestamp,
        level=level,
        event=str(event),
        submission_id=submission_id,
        message=message,
        data=data,
    )


def build_state_replayed_log(
    timestamp: Timestamp,
    submission_id: SubmissionId,
    nominal: str,
    reported: str,
) -> LogEntry:
    """Build a log entry for a replayed submission state.

    Args:
        timestamp: ISO-8601 timestamp.
        submission_id: Submission identifier.
        nominal: Aggregated state of the submission.
        reported: State reported instead.

    Returns:
        LogEntry: Structured replay log entry.
    """
    return build_facade_log(
        timestamp,
        FacadeEvent.STATE_REPLAYED,
        f"Replaying state {reported} instead of {nominal}",
        submission_id=submission_id,
        level=LogLevel.DEBUG,
        data={"nominal_state": nominal, "reported_state": reported},
    )


def build_scenario_fault_log(
    timestamp: Timestamp,
    operation: str,
    scenario_id: str,
    message: str,
    *,
    submission_id: SubmissionId | None = None,
) -> LogEntry:
    """Build a log entry for a fault injected by a scenario.

    Args:
        timestamp: ISO-8601 timestamp.
        operation: Facade operation that failed.
        scenario_id: Id of the active scenario.
        message: Error message.
        submission_id: Submission identifier, if any.

    Returns:
        LogEntry: Structured fault log entry.
    """
    return build_facade_log(
        timestamp,
        FacadeEvent.SCENARIO_FAULT,
        message,
        submission_id=submission_id,
        level=LogLevel.WARN,
        data={"operation": operation, "scenario": scenario_id},
    )
