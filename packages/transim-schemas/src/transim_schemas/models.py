"""Models returned to callers of the translation facade."""

from __future__ import annotations

from pydantic import Field

from transim_schemas.base import BaseSchema
from transim_schemas.primitives import (
    LocaleCode,
    SubmissionId,
    SubmissionState,
    TaskId,
)


class SubmissionModel(BaseSchema):
    """Snapshot of a submission as reported by the backend."""

    submission_id: SubmissionId = Field(..., description="Submission identifier")
    pd_submission_ids: list[str] = Field(
        default_factory=list, description="Project director submission IDs"
    )
    state: SubmissionState = Field(
        SubmissionState.OTHER, description="Reported submission state"
    )
    error: bool = Field(False, description="Backend reports an error state")

    def __str__(self) -> str:
        """Return the submission identifier."""
        return str(self.submission_id)


class TaskModel(BaseSchema):
    """Descriptor of a task handed to download consumers."""

    task_id: TaskId = Field(..., description="Task identifier")
    locale: LocaleCode = Field(..., description="Target locale of the task")

    def __str__(self) -> str:
        """Return the task identifier."""
        return str(self.task_id)
