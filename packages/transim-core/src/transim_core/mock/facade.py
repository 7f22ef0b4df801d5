"""Mock translation facade: simulates the translation backend in memory.

The facade never talks to a real backend. Uploaded contents are staged in a
``ContentStore``, submissions live in a ``SubmissionStore`` and advance along
their task timelines. Downloads return pseudo-translated XLIFF. A
``Scenario`` may inject faults at the upload, cancellation and download
checkpoints and may modify the reported submission.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from typing import TypeVar

from transim_core.mock.pseudo_translation import translate_xliff
from transim_core.mock.stores import ContentStore, SubmissionStore
from transim_core.mock.submission import SubmissionContent
from transim_core.ports.facade import (
    HTTP_OK,
    CommunicationError,
    ContentSource,
    TaskDataConsumer,
    TranslationFacadeProtocol,
)
from transim_core.ports.log import (
    LogSinkProtocol,
    build_facade_log,
    build_scenario_fault_log,
    build_state_replayed_log,
    format_timestamp,
)
from transim_core.scenarios.base import Scenario
from transim_core.scenarios.router import build_scenario
from transim_schemas.events import FacadeEvent
from transim_schemas.logs import LogEntry
from transim_schemas.models import SubmissionModel
from transim_schemas.primitives import JsonValue, LogLevel, SubmissionId, SubmissionState
from transim_schemas.settings import MockSettings

_log = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class MockTranslationFacade(TranslationFacadeProtocol):
    """Translation facade backed by in-memory stores."""

    def __init__(
        self,
        settings: MockSettings,
        *,
        submission_store: SubmissionStore,
        content_store: ContentStore,
        log_sink: LogSinkProtocol | None = None,
        scenario: Scenario | None = None,
    ) -> None:
        """Initialize the facade.

        Args:
            settings: Settings of this facade session.
            submission_store: Shared submission repository.
            content_store: Shared content staging store.
            log_sink: Sink for structured facade events.
            scenario: Scenario to apply; built from the settings if omitted.
        """
        self._settings = settings
        self._submission_store = submission_store
        self._content_store = content_store
        self._log_sink = log_sink
        self._scenario = scenario or build_scenario(settings)
        _log.debug("Mock facade using scenario %r", self._scenario)

    @property
    def settings(self) -> MockSettings:
        """Settings of this facade session."""
        return self._settings

    @property
    def scenario(self) -> Scenario:
        """Active scenario."""
        return self._scenario

    def upload_content(
        self,
        file_name: str,
        source: ContentSource,
        source_locale: str | None = None,
    ) -> str:
        """Stage content for a later submission and return its handle.

        Raises:
            CommunicationError: If the active scenario simulates an outage.
            ContentIOError: If the source cannot be read.
        """
        self._checkpoint("upload_content", self._scenario.start_upload)
        handle = self._content_store.add_content(source)
        self._emit(
            FacadeEvent.CONTENT_UPLOADED,
            f"Uploaded {file_name}",
            data={
                "file_name": file_name,
                "content_handle": handle,
                "source_locale": source_locale,
            },
        )
        return handle

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
        """Create a submission from staged contents.

        Staged contents are consumed: each handle can be submitted once. If any
        handle is unknown, no content is consumed.

        Raises:
            ContentNotFoundError: If a content handle is unknown.
        """
        staged = self._content_store.remove_contents(list(content_map))
        contents = [
            SubmissionContent(
                file_id=handle,
                file_content=staged[handle],
                target_locales=tuple(locales),
            )
            for handle, locales in content_map.items()
        ]
        trimmed_subject = (subject or "").strip()
        submission_id = self._submission_store.add_submission(
            trimmed_subject, contents
        )
        self._emit(
            FacadeEvent.SUBMISSION_SUBMITTED,
            f"Submitted submission {submission_id}",
            submission_id=submission_id,
            data={
                "subject": trimmed_subject,
                "workflow": workflow,
                "submitter": submitter,
                "source_locale": source_locale,
                "due_date": due_date.isoformat() if due_date else None,
                "target_locales": sorted(
                    {locale for locales in content_map.values() for locale in locales}
                ),
            },
        )
        return submission_id

    def cancel_submission(self, submission_id: SubmissionId) -> int:
        """Cancel a submission unless the scenario answers instead.

        Returns:
            int: ``200`` after cancelling, or the scenario's result code.

        Raises:
            CommunicationError: If the active scenario simulates an outage.
            SubmissionNotFoundError: If the submission is unknown.
        """
        result = self._checkpoint(
            "cancel_submission",
            self._scenario.start_cancellation,
            submission_id=submission_id,
        )
        if result is not None:
            self._emit(
                FacadeEvent.SUBMISSION_CANCELLED,
                f"Cancellation answered with {result} without cancelling",
                submission_id=submission_id,
                level=LogLevel.WARN,
                data={"result_code": result, "cancelled": False},
            )
            return result

        self._submission_store.cancel_submission(submission_id)
        self._emit(
            FacadeEvent.SUBMISSION_CANCELLED,
            f"Cancelled submission {submission_id}",
            submission_id=submission_id,
            data={"result_code": HTTP_OK, "cancelled": True},
        )
        return HTTP_OK

    def download_completed_tasks(
        self, submission_id: SubmissionId, consumer: TaskDataConsumer
    ) -> None:
        """Hand pseudo-translated content of completed tasks to a consumer.

        A task is marked delivered only if the consumer accepts it.

        Raises:
            CommunicationError: If the active scenario simulates an outage.
            InvalidContentError: If staged content is not well-formed XML.
            SubmissionNotFoundError: If the submission is unknown.
        """
        completed_tasks = self._submission_store.get_completed_tasks(submission_id)
        self._checkpoint(
            "download_completed_tasks",
            self._scenario.start_download,
            submission_id=submission_id,
        )
        for task in completed_tasks:
            translated = translate_xliff(task.content, self._scenario)
            task_model = task.to_model()
            with io.BytesIO(translated.encode("utf-8")) as stream:
                accepted = consumer(stream, task_model)
            data: dict[str, JsonValue] = {
                "task_id": task.task_id,
                "locale": task.target_locale,
            }
            if accepted:
                task.mark_as_delivered()
                self._emit(
                    FacadeEvent.TASK_DOWNLOADED,
                    f"Delivered task {task.task_id}",
                    submission_id=submission_id,
                    data=data,
                )
            else:
                self._emit(
                    FacadeEvent.TASK_REJECTED,
                    f"Consumer rejected task {task.task_id}",
                    submission_id=submission_id,
                    level=LogLevel.WARN,
                    data=data,
                )

    def confirm_completed_tasks(
        self,
        submission_id: SubmissionId,
        completed_locales: set[str] | None = None,
    ) -> set[str]:
        """Mark completed tasks delivered and collect their locales.

        Args:
            submission_id: Submission identifier.
            completed_locales: Set to add the locales to; a new set if omitted.

        Returns:
            set[str]: The collected locales.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        locales = completed_locales if completed_locales is not None else set()
        completed_tasks = self._submission_store.get_completed_tasks(submission_id)
        for task in completed_tasks:
            locales.add(task.target_locale)
            task.mark_as_delivered()
        self._emit(
            FacadeEvent.TASKS_CONFIRMED,
            f"Confirmed {len(completed_tasks)} completed task(s)",
            submission_id=submission_id,
            data={"locales": sorted(task.target_locale for task in completed_tasks)},
        )
        return locales

    def confirm_cancelled_tasks(self, submission_id: SubmissionId) -> None:
        """Confirm cancellation of cancelled tasks.

        Without any cancelled task the backend itself is taken to have
        cancelled the submission, so the submission is cancelled first.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        cancelled_tasks = self._submission_store.get_cancelled_tasks(submission_id)
        if not cancelled_tasks:
            _log.debug(
                "No cancelled tasks for submission %s. Cancelling first.",
                submission_id,
            )
            self._submission_store.cancel_submission(submission_id)
            cancelled_tasks = self._submission_store.get_cancelled_tasks(
                submission_id
            )
        for task in cancelled_tasks:
            task.mark_as_cancellation_confirmed()
        self._emit(
            FacadeEvent.CANCELLATION_CONFIRMED,
            f"Confirmed cancellation of {len(cancelled_tasks)} task(s)",
            submission_id=submission_id,
            data={"task_ids": [task.task_id for task in cancelled_tasks]},
        )

    def get_submission(self, submission_id: SubmissionId) -> SubmissionModel:
        """Return the submission as currently reported.

        Querying advances any state replay configured for the submission.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        reading = self._submission_store.get_submission_state(submission_id)
        if reading.replayed:
            self._emit_entry(
                build_state_replayed_log(
                    self._timestamp(),
                    submission_id,
                    str(reading.nominal),
                    str(reading.reported),
                )
            )
        submission = SubmissionModel(
            submission_id=submission_id,
            pd_submission_ids=[str(submission_id)],
            state=SubmissionState(reading.reported),
        )
        submission = self._scenario.intercept_submission(submission)
        self._emit(
            FacadeEvent.SUBMISSION_QUERIED,
            f"Submission {submission_id} is {submission.state}",
            submission_id=submission_id,
            level=LogLevel.DEBUG,
            data={"state": str(submission.state), "error": submission.error},
        )
        return submission

    def _checkpoint(
        self,
        operation: str,
        hook: Callable[[], ResultT],
        *,
        submission_id: SubmissionId | None = None,
    ) -> ResultT:
        try:
            return hook()
        except CommunicationError as exc:
            self._emit_entry(
                build_scenario_fault_log(
                    self._timestamp(),
                    operation,
                    self._scenario.id,
                    str(exc),
                    submission_id=submission_id,
                )
            )
            raise

    def _timestamp(self) -> str:
        return format_timestamp(self._submission_store.clock())

    def _emit(
        self,
        event: FacadeEvent,
        message: str,
        *,
        submission_id: SubmissionId | None = None,
        level: LogLevel = LogLevel.INFO,
        data: dict[str, JsonValue] | None = None,
    ) -> None:
        if self._log_sink is None:
            return
        self._emit_entry(
            build_facade_log(
                self._timestamp(),
                event,
                message,
                submission_id=submission_id,
                level=level,
                data=data,
            )
        )

    def _emit_entry(self, entry: LogEntry) -> None:
        if self._log_sink is not None:
            self._log_sink.emit_log(entry)
