"""Protocol definitions and errors for translation facades."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from pydantic import Field

from transim_schemas.base import BaseSchema
from transim_schemas.exit_codes import resolve_exit_code
from transim_schemas.models import SubmissionModel, TaskModel
from transim_schemas.primitives import SubmissionId
from transim_schemas.responses import ErrorDetails, ErrorResponse

type ContentSource = bytes | str | Path | BinaryIO
type TaskDataConsumer = Callable[[BinaryIO, TaskModel], bool]

HTTP_OK = 200


class FacadeErrorCode(StrEnum):
    """Categorized error codes for facade failures."""

    SUBMISSION_NOT_FOUND = "submission_not_found"
    CONTENT_NOT_FOUND = "content_not_found"
    COMMUNICATION_ERROR = "communication_error"
    CONFIGURATION_ERROR = "configuration_error"
    CONTENT_IO_ERROR = "content_io_error"
    INVALID_CONTENT = "invalid_content"
    FACADE_DISABLED = "facade_disabled"


class FacadeErrorDetails(BaseSchema):
    """Detailed facade error context."""

    operation: str | None = Field(None, description="Facade operation name")
    submission_id: SubmissionId | None = Field(
        None, description="Submission identifier"
    )
    content_handle: str | None = Field(None, description="Content handle")
    field: str | None = Field(None, description="Setting or argument name")
    provided: str | None = Field(None, description="Provided value")
    reason: str | None = Field(None, description="Additional error context")


class FacadeErrorInfo(BaseSchema):
    """Structured facade error data."""

    code: FacadeErrorCode = Field(..., description="Facade error code")
    message: str = Field(..., min_length=1, description="Error message")
    details: FacadeErrorDetails | None = Field(None, description="Error details")

    def to_error_response(self) -> ErrorResponse:
        """Convert facade error info to the standard error response schema.

        Returns:
            ErrorResponse: Standard response error payload.
        """
        details: ErrorDetails | None = None
        if self.details is not None:
            details = ErrorDetails(
                field=self.details.field or self.details.operation,
                provided=self.details.provided,
                valid_options=None,
            )
        code_value = str(getattr(self.code, "value", self.code))
        return ErrorResponse(
            code=code_value,
            message=self.message,
            details=details,
            exit_code=int(resolve_exit_code(code_value)),
        )


class FacadeError(Exception):
    """Facade error with structured details."""

    code: FacadeErrorCode = FacadeErrorCode.COMMUNICATION_ERROR

    def __init__(
        self,
        message: str,
        *,
        details: FacadeErrorDetails | None = None,
    ) -> None:
        """Initialize the facade error.

        Args:
            message: Human readable error message.
            details: Optional structured error context.
        """
        super().__init__(message)
        self.info = FacadeErrorInfo(code=self.code, message=message, details=details)


class SubmissionNotFoundError(FacadeError):
    """Raised when a submission ID is unknown to the backend."""

    code = FacadeErrorCode.SUBMISSION_NOT_FOUND


class ContentNotFoundError(FacadeError):
    """Raised when a content handle is unknown or already consumed."""

    code = FacadeErrorCode.CONTENT_NOT_FOUND


class CommunicationError(FacadeError):
    """Raised for (simulated) transient backend unavailability."""

    code = FacadeErrorCode.COMMUNICATION_ERROR


class ConfigurationError(FacadeError):
    """Raised for invalid facade settings."""

    code = FacadeErrorCode.CONFIGURATION_ERROR


class ContentIOError(FacadeError):
    """Raised when an upload source cannot be read."""

    code = FacadeErrorCode.CONTENT_IO_ERROR


class InvalidContentError(FacadeError):
    """Raised when staged content cannot be parsed for translation."""

    code = FacadeErrorCode.INVALID_CONTENT


class FacadeDisabledError(FacadeError):
    """Raised by the disabled facade for every operation."""

    code = FacadeErrorCode.FACADE_DISABLED


@runtime_checkable
class TranslationFacadeProtocol(Protocol):
    """Capability surface of a translation backend."""

    def upload_content(
        self,
        file_name: str,
        source: ContentSource,
        source_locale: str | None = None,
    ) -> str:
        """Stage content for a later submission and return its handle.

        Raises:
            CommunicationError: If the backend is unavailable.
            ContentIOError: If the source cannot be read.
        """
        raise NotImplementedError

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
        """Submit staged contents for translation into target locales.

        Raises:
            ContentNotFoundError: If a content handle is unknown.
        """
        raise NotImplementedError

    def cancel_submission(self, submission_id: SubmissionId) -> int:
        """Request cancellation and return an HTTP-style result code.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
            CommunicationError: If the backend is unavailable.
        """
        raise NotImplementedError

    def download_completed_tasks(
        self, submission_id: SubmissionId, consumer: TaskDataConsumer
    ) -> None:
        """Hand translated content of completed tasks to a consumer.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
            CommunicationError: If the backend is unavailable.
        """
        raise NotImplementedError

    def confirm_completed_tasks(
        self,
        submission_id: SubmissionId,
        completed_locales: set[str] | None = None,
    ) -> set[str]:
        """Mark completed tasks delivered and collect their locales.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        raise NotImplementedError

    def confirm_cancelled_tasks(self, submission_id: SubmissionId) -> None:
        """Confirm cancellation of cancelled tasks.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        raise NotImplementedError

    def get_submission(self, submission_id: SubmissionId) -> SubmissionModel:
        """Return the current submission snapshot.

        Raises:
            SubmissionNotFoundError: If the submission is unknown.
        """
        raise NotImplementedError
