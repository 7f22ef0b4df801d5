"""Facade used when the translation service is switched off."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

from transim_core.ports.facade import (
    ContentSource,
    FacadeDisabledError,
    FacadeErrorDetails,
    TaskDataConsumer,
    TranslationFacadeProtocol,
)
from transim_schemas.models import SubmissionModel
from transim_schemas.primitives import SubmissionId


def _disabled(operation: str) -> FacadeDisabledError:
    return FacadeDisabledError(
        "Translation service disabled.",
        details=FacadeErrorDetails(operation=operation),
    )


class DisabledTranslationFacade(TranslationFacadeProtocol):
    """Facade rejecting every operation.

    Only ``get_submission`` answers, with a submission in state OTHER, so
    that polling callers see no progress instead of failing.
    """

    def upload_content(
        self,
        file_name: str,
        source: ContentSource,
        source_locale: str | None = None,
    ) -> str:
        """Reject the upload."""
        raise _disabled("upload_content")

    def submit_submission(
        self,
        subject: str | None,
        comment: str | None,
        due_date: datetime | None,
        workflow: str | None,
        submitter: str | None,
        source_locale: str,
        content_map: Mapping[str, Sequence[str]],
    ) -> SubmissionId:
        """Reject the submission."""
        raise _disabled("submit_submission")

    def cancel_submission(self, submission_id: SubmissionId) -> int:
        """Reject the cancellation."""
        raise _disabled("cancel_submission")

    def download_completed_tasks(
        self, submission_id: SubmissionId, consumer: TaskDataConsumer
    ) -> None:
        """Reject the download."""
        raise _disabled("download_completed_tasks")

    def confirm_completed_tasks(
        self,
        submission_id: SubmissionId,
        completed_locales: set[str] | None = None,
    ) -> set[str]:
        """Reject the confirmation."""
        raise _disabled("confirm_completed_tasks")

    def confirm_cancelled_tasks(self, submission_id: SubmissionId) -> None:
        """Reject the confirmation."""
        raise _disabled("confirm_cancelled_tasks")

    def get_submission(self, submission_id: SubmissionId) -> SubmissionModel:
        """Return a submission without progress."""
        return SubmissionModel(submission_id=submission_id)
