"""Scenarios simulating unavailability of the translation backend."""

from __future__ import annotations

import logging

from transim_core.ports.facade import (
    CommunicationError,
    FacadeErrorDetails,
)
from transim_core.scenarios.base import Scenario, with_state
from transim_schemas.models import SubmissionModel
from transim_schemas.primitives import SubmissionState

_log = logging.getLogger(__name__)

HTTP_NOT_FOUND = 404

# States in which the backend would refuse a cancellation. Reported as
# TRANSLATE so that callers keep trying to cancel.
FORBIDDEN_CANCELLATION_STATES = frozenset(
    {
        SubmissionState.CANCELLED,
        SubmissionState.CANCELLATION_CONFIRMED,
        SubmissionState.COMPLETED,
        SubmissionState.DELIVERED,
        SubmissionState.REDELIVERED,
    }
)


def communication_error(operation: str) -> CommunicationError:
    """Build the error raised for a simulated outage."""
    return CommunicationError(
        f"Exception to test {operation} communication errors with translation "
        "service.",
        details=FacadeErrorDetails(operation=operation, reason="simulated outage"),
    )


class GccOutageOnUploadScenario(Scenario):
    """Every upload fails with a communication error."""

    id = "gcc-outage-on-upload"
    description = "Uploads fail with a communication error."

    def start_upload(self) -> None:
        raise communication_error("upload")


class GccOutageOnDownloadScenario(Scenario):
    """Every download fails with a communication error."""

    id = "gcc-outage-on-download"
    description = "Downloads fail with a communication error."

    def start_download(self) -> None:
        raise communication_error("download")


class _CancellationBlockedScenario(Scenario):
    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        if submission.state in FORBIDDEN_CANCELLATION_STATES:
            return with_state(submission, SubmissionState.TRANSLATE)
        return submission


class GccOutageOnCancellationScenario(_CancellationBlockedScenario):
    """Cancellation fails with a communication error.

    Submissions never leave the translation state, so the cancellation has
    to be retried until the test ends.
    """

    id = "gcc-outage-on-cancellation"
    description = "Cancellations fail with a communication error."

    def start_cancellation(self) -> int | None:
        raise communication_error("cancel")


class CancellationNotFoundScenario(_CancellationBlockedScenario):
    """Cancellation responds as if the submission did not exist."""

    id = "cancellation-not-found"
    description = "Cancellations return 404 without cancelling."

    def start_cancellation(self) -> int | None:
        _log.info(
            "Scenario '%s' simulates cancellation of a non-existing submission, "
            "returning %d.",
            self.id,
            HTTP_NOT_FOUND,
        )
        return HTTP_NOT_FOUND
