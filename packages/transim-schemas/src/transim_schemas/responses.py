"""API response envelope schemas for CLI output."""

from __future__ import annotations

from pydantic import Field

from transim_schemas.base import BaseSchema
from transim_schemas.primitives import (
    LocaleCode,
    SubmissionId,
    SubmissionState,
    Timestamp,
)


class MetaInfo(BaseSchema):
    """Metadata for API responses."""

    timestamp: Timestamp = Field(..., description="ISO-8601 response timestamp")


class ErrorDetails(BaseSchema):
    """Detailed error context for responses."""

    field: str | None = Field(None, description="Field name if applicable")
    provided: str | None = Field(None, description="Provided value")
    valid_options: list[str] | None = Field(
        None, description="Valid options if applicable"
    )


class ErrorResponse(BaseSchema):
    """Error information in response."""

    code: str = Field(..., min_length=1, description="Error code")
    message: str = Field(..., min_length=1, description="Error message")
    details: ErrorDetails | None = Field(None, description="Optional error details")
    exit_code: int | None = Field(None, description="Process exit code")


class ApiResponse[ResponseData](BaseSchema):
    """Generic API response envelope."""

    data: ResponseData | None = Field(
        None, description="Success payload, null on error"
    )
    error: ErrorResponse | None = Field(
        None, description="Error information, null on success"
    )
    meta: MetaInfo = Field(..., description="Response metadata")


class StateObservation(BaseSchema):
    """Submission state observed while polling."""

    elapsed_seconds: float = Field(..., ge=0, description="Seconds since submit")
    state: SubmissionState = Field(..., description="Reported state")
    error: bool = Field(False, description="Reported error flag")


class SimulationResult(BaseSchema):
    """Result payload for the CLI simulate command."""

    submission_id: SubmissionId = Field(..., description="Submission identifier")
    final_state: SubmissionState = Field(..., description="Last reported state")
    observations: list[StateObservation] = Field(
        default_factory=list, description="State changes in observation order"
    )
    delivered_locales: list[LocaleCode] = Field(
        default_factory=list, description="Locales confirmed as delivered"
    )
    output_files: list[str] = Field(
        default_factory=list, description="Paths of downloaded translations"
    )


class ScenarioInfo(BaseSchema):
    """Registered scenario as listed by the CLI."""

    id: str = Field(..., min_length=1, description="Scenario identifier")
    description: str = Field(..., description="What the scenario simulates")
