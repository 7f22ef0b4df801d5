"""Scenario base class: checkpoints of the mock translation facade."""

from __future__ import annotations

from typing import ClassVar
from xml.dom.minidom import Document

from transim_schemas.models import SubmissionModel
from transim_schemas.primitives import SubmissionState


class Scenario:
    """A scenario intercepts the mock facade at defined checkpoints.

    Every checkpoint defaults to doing nothing. Subclasses override the
    checkpoints they are interested in, for example to raise a
    ``CommunicationError`` on upload or to modify the reported submission.
    """

    id: ClassVar[str] = "no-operation"
    description: ClassVar[str] = "Regular behavior without any interception."

    def start_upload(self) -> None:
        """Called before content is staged."""

    def start_cancellation(self) -> int | None:
        """Called before a submission is cancelled.

        Returns:
            int | None: Result code to return instead of cancelling, or None
            to perform the cancellation.
        """
        return None

    def start_download(self) -> None:
        """Called once before any completed task is downloaded."""

    def post_translate_text(self, target_content: str) -> str:
        """Modify a pseudo-translated trans-unit target."""
        return target_content

    def post_translate_document(self, document: Document) -> None:
        """Modify the pseudo-translated XLIFF document in place."""

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        """Modify the submission reported to the caller."""
        return submission

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class NoOperationScenario(Scenario):
    """Scenario which does not intercept anything."""


def with_state(submission: SubmissionModel, state: SubmissionState) -> SubmissionModel:
    """Return a copy of the submission reporting another state."""
    return submission.updated(state=state)
