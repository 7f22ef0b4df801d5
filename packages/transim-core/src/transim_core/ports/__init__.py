"""Ports: capability surfaces and error taxonomy."""

from transim_core.ports.facade import (
    HTTP_OK,
    CommunicationError,
    ConfigurationError,
    ContentIOError,
    ContentNotFoundError,
    ContentSource,
    FacadeDisabledError,
    FacadeError,
    FacadeErrorCode,
    FacadeErrorDetails,
    FacadeErrorInfo,
    InvalidContentError,
    SubmissionNotFoundError,
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

__all__ = [
    "HTTP_OK",
    "CommunicationError",
    "ConfigurationError",
    "ContentIOError",
    "ContentNotFoundError",
    "ContentSource",
    "FacadeDisabledError",
    "FacadeError",
    "FacadeErrorCode",
    "FacadeErrorDetails",
    "FacadeErrorInfo",
    "InvalidContentError",
    "LogSinkProtocol",
    "SubmissionNotFoundError",
    "TaskDataConsumer",
    "TranslationFacadeProtocol",
    "build_facade_log",
    "build_scenario_fault_log",
    "build_state_replayed_log",
    "format_timestamp",
]
