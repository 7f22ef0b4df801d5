"""Scenarios built from settings rather than registered by id."""

from __future__ import annotations

from collections.abc import Sequence
from xml.dom.minidom import Document

from transim_core.scenarios.base import Scenario
from transim_core.scenarios.outage import HTTP_NOT_FOUND, communication_error
from transim_core.scenarios.translation import TranslateInvalidXliffScenario
from transim_schemas.models import SubmissionModel
from transim_schemas.primitives import MockError


class ForcedErrorScenario(Scenario):
    """Scenario realising the forced fault selector of the mock settings."""

    id = "forced-error"
    description = "Fault selected by the mock error setting."

    def __init__(self, error: MockError) -> None:
        """Initialize the scenario.

        Args:
            error: Selected fault.
        """
        self._error = MockError(error)

    @property
    def error(self) -> MockError:
        """Selected fault."""
        return self._error

    def start_upload(self) -> None:
        if self._error == MockError.UPLOAD_COMMUNICATION:
            raise communication_error("upload")

    def start_cancellation(self) -> int | None:
        if self._error == MockError.CANCEL_COMMUNICATION:
            raise communication_error("cancel")
        if self._error == MockError.CANCEL_RESULT:
            # Any of 400, 401, 404 or 500 is a documented cancellation result.
            return HTTP_NOT_FOUND
        return None

    def start_download(self) -> None:
        if self._error == MockError.DOWNLOAD_COMMUNICATION:
            raise communication_error("download")

    def post_translate_document(self, document: Document) -> None:
        if self._error == MockError.DOWNLOAD_XLIFF:
            TranslateInvalidXliffScenario().post_translate_document(document)

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        if self._error == MockError.SUBMISSION_ERROR:
            return submission.updated(error=True)
        return submission

    def __repr__(self) -> str:
        return f"ForcedErrorScenario(error={self._error!r})"


class CompositeScenario(Scenario):
    """Chain of scenarios applied in order.

    The first scenario supplying a cancellation result wins; text, document
    and submission hooks are applied in sequence.
    """

    def __init__(self, scenarios: Sequence[Scenario]) -> None:
        """Initialize the composite.

        Args:
            scenarios: Scenarios to apply in order.
        """
        self._scenarios = tuple(scenarios)

    @property
    def id(self) -> str:  # type: ignore[override]
        """Ids of the chained scenarios joined by ``+``."""
        return "+".join(scenario.id for scenario in self._scenarios)

    @property
    def scenarios(self) -> tuple[Scenario, ...]:
        """Chained scenarios."""
        return self._scenarios

    def start_upload(self) -> None:
        for scenario in self._scenarios:
            scenario.start_upload()

    def start_cancellation(self) -> int | None:
        for scenario in self._scenarios:
            result = scenario.start_cancellation()
            if result is not None:
                return result
        return None

    def start_download(self) -> None:
        for scenario in self._scenarios:
            scenario.start_download()

    def post_translate_text(self, target_content: str) -> str:
        for scenario in self._scenarios:
            target_content = scenario.post_translate_text(target_content)
        return target_content

    def post_translate_document(self, document: Document) -> None:
        for scenario in self._scenarios:
            scenario.post_translate_document(document)

    def intercept_submission(self, submission: SubmissionModel) -> SubmissionModel:
        for scenario in self._scenarios:
            submission = scenario.intercept_submission(submission)
        return submission

    def __repr__(self) -> str:
        return f"CompositeScenario({list(self._scenarios)!r})"
