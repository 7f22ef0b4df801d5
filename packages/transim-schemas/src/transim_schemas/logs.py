"""JSONL log entry schema for facade events."""

from __future__ import annotations

from pydantic import Field

from transim_schemas.base import BaseSchema
from transim_schemas.primitives import (
    EventName,
    JsonValue,
    LogLevel,
    SubmissionId,
    Timestamp,
)


class LogEntry(BaseSchema):
    """Single log line in JSONL format."""

    timestamp: Timestamp = Field(
        ..., description="ISO-8601 timestamp for the log entry"
    )
    level: LogLevel = Field(..., description="Log level")
    event: EventName = Field(..., description="Event name")
    submission_id: SubmissionId | None = Field(
        None, description="Submission identifier if applicable"
    )
    message: str = Field(..., min_length=1, description="Log message")
    data: dict[str, JsonValue] | None = Field(None, description="Structured event data")
