"""In-memory stores backing the mock translation facade."""

from __future__ import annotations

import itertools
import logging
import random
import threading
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO

from transim_core.mock.submission import (
    Submission,
    SubmissionContent,
    SubmissionStateReading,
)
from transim_core.mock.task import Task
from transim_core.mock.timeline import Clock, system_clock
from transim_core.ports.facade import (
    ContentIOError,
    ContentNotFoundError,
    ContentSource,
    FacadeErrorDetails,
    SubmissionNotFoundError,
)
from transim_schemas.primitives import SubmissionId
from transim_schemas.settings import MockSettings

_log = logging.getLogger(__name__)


def read_content_source(source: ContentSource) -> str:
    """Read an upload source into text.

    Args:
        source: Raw bytes, text, a file path or a binary stream.

    Returns:
        str: UTF-8 decoded content.

    Raises:
        ContentIOError: If the source cannot be read or decoded.
    """
    try:
        if isinstance(source, str):
            return source
        if isinstance(source, bytes):
            data = source
        elif isinstance(source, Path):
            data = source.read_bytes()
        else:
            data = _read_stream(source)
        return data.decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentIOError(
            f"Failed to read content: {exc}",
            details=FacadeErrorDetails(operation="upload_content", reason=str(exc)),
        ) from exc


def _read_stream(stream: BinaryIO) -> bytes:
    data = stream.read()
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


class ContentStore:
    """Staging area for uploaded content until a submission consumes it."""

    def __init__(self) -> None:
        """Initialize an empty content store."""
        self._lock = threading.Lock()
        self._contents: dict[str, str] = {}

    def add_content(self, source: ContentSource) -> str:
        """Stage content and return a fresh handle.

        Args:
            source: Content to stage.

        Returns:
            str: Unique content handle.

        Raises:
            ContentIOError: If the source cannot be read.
        """
        content = read_content_source(source)
        handle = str(uuid.uuid4())
        with self._lock:
            self._contents[handle] = content
        _log.debug("Staged content %s (%d characters)", handle, len(content))
        return handle

    def remove_content(self, handle: str) -> str:
        """Remove staged content and return it.

        Args:
            handle: Content handle returned by ``add_content``.

        Returns:
            str: Staged content.

        Raises:
            ContentNotFoundError: If the handle is unknown or already consumed.
        """
        return self.remove_contents([handle])[handle]

    def remove_contents(self, handles: Sequence[str]) -> dict[str, str]:
        """Remove several staged contents at once.

        Nothing is removed unless every handle is staged.

        Args:
            handles: Content handles returned by ``add_content``.

        Returns:
            dict[str, str]: Staged content keyed by handle.

        Raises:
            ContentNotFoundError: If a handle is unknown or already consumed.
        """
        with self._lock:
            missing = [handle for handle in handles if handle not in self._contents]
            if not missing:
                return {handle: self._contents.pop(handle) for handle in handles}
        raise ContentNotFoundError(
            f"Content not found: {', '.join(missing)}",
            details=FacadeErrorDetails(
                operation="remove_contents", content_handle=missing[0]
            ),
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._contents)


class SubmissionStore:
    """Repository of mock submissions.

    All map access happens under one lock. Task flags are not covered by the
    lock: flag flips are idempotent, so a racing read observes at worst the
    previous state.
    """

    def __init__(
        self,
        settings: MockSettings | None = None,
        *,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize an empty submission store.

        Args:
            settings: Initial settings; defaults if omitted.
            clock: Epoch millisecond clock shared by all tasks.
            rng: Random source for delay jitter.
        """
        self._lock = threading.Lock()
        self._settings = settings or MockSettings()
        self._clock = clock
        self._rng = rng or random.SystemRandom()
        self._ids = itertools.count()
        self._submissions: dict[SubmissionId, Submission] = {}

    @property
    def clock(self) -> Clock:
        """Clock shared by all submissions of this store."""
        return self._clock

    @property
    def settings(self) -> MockSettings:
        """Currently applied settings."""
        with self._lock:
            return self._settings

    def apply_settings(self, settings: MockSettings) -> None:
        """Replace the settings used for new submissions and replays.

        Args:
            settings: New settings.
        """
        with self._lock:
            self._settings = settings
        _log.debug("Applied settings: %r", settings)

    def add_submission(
        self, subject: str | None, contents: Sequence[SubmissionContent]
    ) -> SubmissionId:
        """Create a submission and return its identifier.

        Args:
            subject: Submission subject, possibly carrying a state directive.
            contents: Contents with their target locales.

        Returns:
            SubmissionId: Identifier of the new submission.
        """
        with self._lock:
            submission_id = next(self._ids)
            submission = Submission(
                subject,
                contents,
                self._settings,
                clock=self._clock,
                rng=self._rng,
            )
            self._submissions[submission_id] = submission
        _log.debug("Added submission %s: %r", submission_id, submission)
        return submission_id

    def cancel_submission(self, submission_id: SubmissionId) -> None:
        """Cancel all undelivered tasks of a submission.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        with self._lock:
            self._get(submission_id, "cancel_submission").cancel()

    def get_submission_state(
        self, submission_id: SubmissionId
    ) -> SubmissionStateReading:
        """Aggregate the state of a submission, applying state replay.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        with self._lock:
            submission = self._get(submission_id, "get_submission_state")
            return submission.get_state(self._settings.submission_states)

    def get_completed_tasks(self, submission_id: SubmissionId) -> list[Task]:
        """Return tasks of a submission currently in state COMPLETED.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        with self._lock:
            return self._get(submission_id, "get_completed_tasks").get_completed_tasks()

    def get_cancelled_tasks(self, submission_id: SubmissionId) -> list[Task]:
        """Return tasks of a submission currently in state CANCELLED.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        with self._lock:
            return self._get(submission_id, "get_cancelled_tasks").get_cancelled_tasks()

    def _get(self, submission_id: SubmissionId, operation: str) -> Submission:
        submission = self._submissions.get(submission_id)
        if submission is None:
            raise SubmissionNotFoundError(
                f"Submission not found: {submission_id}",
                details=FacadeErrorDetails(
                    operation=operation, submission_id=submission_id
                ),
            )
        return submission

    def __len__(self) -> int:
        with self._lock:
            return len(self._submissions)
