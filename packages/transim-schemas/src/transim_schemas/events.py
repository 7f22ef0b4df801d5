"""Event taxonomy for facade observability."""

from __future__ import annotations

from enum import StrEnum


class FacadeEvent(StrEnum):
    """Event names emitted by the mock translation facade."""

    CONTENT_UPLOADED = "content_uploaded"
    SUBMISSION_SUBMITTED = "submission_submitted"
    SUBMISSION_CANCELLED = "submission_cancelled"
    SUBMISSION_QUERIED = "submission_queried"
    STATE_REPLAYED = "state_replayed"
    TASK_DOWNLOADED = "task_downloaded"
    TASK_REJECTED = "task_rejected"
    TASKS_CONFIRMED = "tasks_confirmed"
    CANCELLATION_CONFIRMED = "cancellation_confirmed"
    SCENARIO_FAULT = "scenario_fault"
