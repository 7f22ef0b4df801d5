"""transim-core: Mock translation backend engine."""

from transim_core.mock import (
    MockBackend,
    MockTranslationFacade,
    aggregate_submission_state,
    resolve_settings,
)
from transim_core.ports import (
    HTTP_OK,
    CommunicationError,
    ConfigurationError,
    ContentIOError,
    ContentNotFoundError,
    FacadeDisabledError,
    FacadeError,
    FacadeErrorCode,
    InvalidContentError,
    LogSinkProtocol,
    SubmissionNotFoundError,
    TranslationFacadeProtocol,
)
from transim_core.providers import open_facade
from transim_core.scenarios import build_scenario, get_scenario, list_scenarios
from transim_core.version import VERSION

__version__ = "0.1.0"

__all__ = [
    "HTTP_OK",
    "VERSION",
    "CommunicationError",
    "ConfigurationError",
    "ContentIOError",
    "ContentNotFoundError",
    "FacadeDisabledError",
    "FacadeError",
    "FacadeErrorCode",
    "InvalidContentError",
    "LogSinkProtocol",
    "MockBackend",
    "MockTranslationFacade",
    "SubmissionNotFoundError",
    "TranslationFacadeProtocol",
    "aggregate_submission_state",
    "build_scenario",
    "get_scenario",
    "list_scenarios",
    "open_facade",
    "resolve_settings",
]
