"""Unit tests for facade models."""

import pytest
from pydantic import ValidationError

from transim_schemas.models import SubmissionModel, TaskModel
from transim_schemas.primitives import SubmissionState


def test_updated_returns_validated_copy() -> None:
    """Ensure updated copies leave the original untouched."""
    submission = SubmissionModel(submission_id=3, state=SubmissionState.COMPLETED)

    flagged = submission.updated(error=True, state=SubmissionState.REDELIVERED)

    assert flagged.error is True
    assert flagged.state == SubmissionState.REDELIVERED
    assert flagged.submission_id == 3
    assert submission.error is False
    assert submission.state == SubmissionState.COMPLETED


def test_updated_rejects_invalid_values() -> None:
    """Ensure assignments on the copy are validated."""
    submission = SubmissionModel(submission_id=3)

    with pytest.raises(ValidationError):
        submission.updated(submission_id=-1)


@pytest.mark.parametrize(
    "locale", ["de", "pt_BR", "en-US-x-twain", "de-DE-u-co-phonebk", ""]
)
def test_task_model_accepts_opaque_locales(locale: str) -> None:
    """Ensure any locale tag is carried as given."""
    task = TaskModel(task_id=1, locale=locale)

    assert task.locale == locale
    assert str(task) == "1"
