"""Primitive types and enums shared across transim schemas."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import Field

ISO_8601_PATTERN = (
    r"^\d{4}-\d{2}-\d{2}T"
    r"\d{2}:\d{2}:\d{2}"
    r"(?:\.\d+)?"
    r"(?:Z|[+-]\d{2}:\d{2})$"
)
EVENT_NAME_PATTERN = r"^[a-z][a-z0-9_]*$"

type SubmissionId = Annotated[int, Field(ge=0)]
type TaskId = Annotated[int, Field(ge=0)]
type ContentHandle = Annotated[str, Field(min_length=1)]
# Locale tags are opaque; the empty string is the root locale.
type LocaleCode = str
type Timestamp = Annotated[str, Field(pattern=ISO_8601_PATTERN)]
type EventName = Annotated[str, Field(pattern=EVENT_NAME_PATTERN)]

type JsonPrimitive = str | int | float | bool | None
type JsonValue = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]


def normalize_state_name(name: str) -> str:
    """Normalize a state name for lenient lookups.

    Case is ignored and word separators may be spaces, dashes or underscores.

    Args:
        name: Raw state name.

    Returns:
        str: Upper-case name with underscores as word separators.
    """
    return name.strip().replace(" ", "_").replace("-", "_").upper()


class SubmissionState(StrEnum):
    """Externally visible submission states of the translation backend."""

    IN_PRE_PROCESS = "IN_PRE_PROCESS"
    STARTED = "STARTED"
    ANALYZED = "ANALYZED"
    AWAITING_APPROVAL = "AWAITING_APPROVAL"
    AWAITING_QUOTE_APPROVAL = "AWAITING_QUOTE_APPROVAL"
    IN_PROGRESS = "IN_PROGRESS"
    TRANSLATE = "TRANSLATE"
    REVIEW = "REVIEW"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"
    REDELIVERED = "REDELIVERED"
    CANCELLED = "CANCELLED"
    CANCELLATION_CONFIRMED = "CANCELLATION_CONFIRMED"
    OTHER = "OTHER"

    @classmethod
    def find(cls, name: str) -> SubmissionState | None:
        """Look up a submission state by name.

        Args:
            name: State name (case-insensitive, separator tolerant).

        Returns:
            SubmissionState | None: Matching state or None if unknown.
        """
        try:
            return cls(normalize_state_name(name))
        except ValueError:
            return None


class TaskState(StrEnum):
    """Simplified task state model of the mock backend.

    OTHER is everything we do not care about and is the initial state.
    COMPLETED is reached automatically, DELIVERED manually.
    """

    OTHER = "OTHER"
    CANCELLED = "CANCELLED"
    CANCELLATION_CONFIRMED = "CANCELLATION_CONFIRMED"
    COMPLETED = "COMPLETED"
    DELIVERED = "DELIVERED"

    @classmethod
    def parse(cls, name: str) -> TaskState:
        """Parse a task state name, defaulting to OTHER for unknown names."""
        try:
            return cls(normalize_state_name(name))
        except ValueError:
            return cls.OTHER

    @classmethod
    def parse_csv(cls, states_csv: str) -> tuple[TaskState, ...]:
        """Parse comma-separated task states.

        Entries are trimmed and empty entries dropped. Unknown entries map
        to OTHER.

        Args:
            states_csv: Comma-separated task state names.

        Returns:
            tuple[TaskState, ...]: Parsed states in input order.
        """
        return tuple(
            cls.parse(item) for item in states_csv.split(",") if item.strip()
        )


class MockError(StrEnum):
    """Values for the forced communication fault selector."""

    CANCEL_COMMUNICATION = "CANCEL_COMMUNICATION"
    CANCEL_RESULT = "CANCEL_RESULT"
    DOWNLOAD_COMMUNICATION = "DOWNLOAD_COMMUNICATION"
    DOWNLOAD_XLIFF = "DOWNLOAD_XLIFF"
    SUBMISSION_ERROR = "SUBMISSION_ERROR"
    UPLOAD_COMMUNICATION = "UPLOAD_COMMUNICATION"

    @classmethod
    def try_parse(cls, value: str) -> MockError | None:
        """Parse a selector value, returning None for blank or unknown values."""
        if not value.strip():
            return None
        try:
            return cls(normalize_state_name(value))
        except ValueError:
            return None


class LogLevel(StrEnum):
    """Log level values for JSONL logs."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LogSinkType(StrEnum):
    """Supported log sink types."""

    CONSOLE = "console"
    FILE = "file"
    MEMORY = "memory"
    NOOP = "noop"
