"""Settings schemas for the mock translation backend.

The mock backend is configured through a nested mapping, usually found below
a ``mock`` key of the translation service settings::

    mock:
      stateChangeDelaySeconds: 120
      stateChangeDelayOffsetPercentage: 50
      error: UPLOAD_COMMUNICATION
      scenario: submission-error
      submissionStates:
        COMPLETED:
          after: REDELIVERED
          final: true
        DELIVERED:
          override:
            - OTHER
            - REDELIVERED
        REVIEW:
          before: OTHER

Parsing is fault-tolerant: unknown keys are ignored and values of the wrong
type fall back to their defaults (logged at debug level). Values of the right
type but out of range are rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Self

from pydantic import Field, field_validator, model_validator

from transim_schemas.base import BaseSchema
from transim_schemas.primitives import LogSinkType, MockError, SubmissionState

_log = logging.getLogger(__name__)

DEFAULT_STATE_CHANGE_DELAY_SECONDS = 120
DEFAULT_STATE_CHANGE_DELAY_OFFSET_PERCENTAGE = 50

CONFIG_MOCK = "mock"
CONFIG_STATE_CHANGE_DELAY_SECONDS = "stateChangeDelaySeconds"
CONFIG_STATE_CHANGE_DELAY_OFFSET_PERCENTAGE = "stateChangeDelayOffsetPercentage"
LEGACY_CONFIG_DELAY_SECONDS = "mockDelaySeconds"
LEGACY_CONFIG_DELAY_OFFSET_PERCENTAGE = "mockDelayOffsetPercentage"
CONFIG_ERROR = "error"
LEGACY_CONFIG_ERROR = "mockError"
CONFIG_SCENARIO = "scenario"
CONFIG_SUBMISSION_STATES = "submissionStates"


class StatePointcutConfig(BaseSchema):
    """Replay configuration attached to one nominal submission state."""

    before: list[SubmissionState] = Field(
        default_factory=list, description="States to report before the state"
    )
    after: list[SubmissionState] = Field(
        default_factory=list, description="States to report after the state"
    )
    override: list[SubmissionState] = Field(
        default_factory=list, description="States to report instead of the state"
    )
    final: bool = Field(
        False, description="Freeze on the last replayed state once reached"
    )

    def is_empty(self) -> bool:
        """Return True if no replacement states are configured."""
        return not (self.before or self.after or self.override)

    @classmethod
    def from_config(cls, config: object) -> StatePointcutConfig | None:
        """Parse a pointcut from a raw mapping.

        The keys ``before``, ``after``, ``override`` and ``final`` are all
        optional. States may be given as a single string or a list of
        strings; unknown states and non-string values are dropped.

        Args:
            config: Raw configuration value.

        Returns:
            StatePointcutConfig | None: Parsed pointcut, or None if the value
            is not a non-empty mapping.
        """
        if not isinstance(config, Mapping) or not config:
            return None
        final = config.get("final")
        return cls(
            before=_parse_state_list(config.get("before")),
            after=_parse_state_list(config.get("after")),
            override=_parse_state_list(config.get("override")),
            final=final is True,
        )


class MockSubmissionStates(BaseSchema):
    """Mapping from nominal submission state to its replay pointcut.

    Once a replay is active for a submission it is not intercepted by other
    pointcuts. Assuming OTHER is never reached naturally, the following will
    just replace COMPLETED by OTHER and never honor the OTHER pointcut::

        COMPLETED:
          override: OTHER
        OTHER:
          override: DELIVERED
    """

    pointcuts: dict[SubmissionState, StatePointcutConfig] = Field(
        default_factory=dict, description="Pointcut configuration per state"
    )

    def get(self, state: SubmissionState) -> StatePointcutConfig | None:
        """Return the pointcut configured for a state, if any."""
        return self.pointcuts.get(state)

    @classmethod
    def from_config(cls, config: object) -> MockSubmissionStates:
        """Parse pointcut configuration from a raw mapping.

        Args:
            config: Raw mapping of state name to pointcut mapping.

        Returns:
            MockSubmissionStates: Parsed configuration; empty on invalid input.
        """
        if not isinstance(config, Mapping):
            return cls()
        pointcuts: dict[SubmissionState, StatePointcutConfig] = {}
        for state_name, state_config in config.items():
            if not isinstance(state_name, str):
                _log.debug("Ignoring invalid type of state name: %r", state_name)
                continue
            state = SubmissionState.find(state_name)
            if state is None:
                _log.debug("Ignoring unknown submission state: %s", state_name)
                continue
            pointcut = StatePointcutConfig.from_config(state_config)
            if pointcut is None:
                _log.debug(
                    "Ignoring invalid configuration for submission state %s: %r",
                    state_name,
                    state_config,
                )
                continue
            pointcuts[state] = pointcut
        return cls(pointcuts=pointcuts)


class MockSettings(BaseSchema):
    """Settings controlling timing, faults and state replay of the mock."""

    state_change_delay_seconds: int = Field(
        DEFAULT_STATE_CHANGE_DELAY_SECONDS,
        ge=0,
        description="Base delay in seconds between task state changes",
    )
    state_change_delay_offset_percentage: int = Field(
        DEFAULT_STATE_CHANGE_DELAY_OFFSET_PERCENTAGE,
        description="Symmetric random jitter applied to each delay, in percent",
    )
    error: MockError | None = Field(
        None, description="Forced communication fault selector"
    )
    scenario: str | None = Field(None, description="Scenario identifier")
    submission_states: MockSubmissionStates = Field(
        default_factory=MockSubmissionStates,
        description="State replay configuration",
    )

    @field_validator("state_change_delay_offset_percentage")
    @classmethod
    def _validate_offset_percentage(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError("Offset percentage must be between 0 and 100")
        return value

    @field_validator("error", mode="before")
    @classmethod
    def _coerce_error(cls, value: object) -> MockError | None:
        if isinstance(value, str) and not isinstance(value, MockError):
            return MockError(value)
        return value  # type: ignore[return-value]

    @classmethod
    def from_config(cls, config: Mapping[str, object]) -> MockSettings:
        """Parse settings from the raw ``mock`` mapping.

        Args:
            config: Raw mock configuration.

        Returns:
            MockSettings: Parsed settings with defaults applied.

        Raises:
            pydantic.ValidationError: If the offset percentage is out of range.
        """
        if not config:
            return cls()

        delay_seconds = _first_number(
            config,
            CONFIG_STATE_CHANGE_DELAY_SECONDS,
            LEGACY_CONFIG_DELAY_SECONDS,
            default=DEFAULT_STATE_CHANGE_DELAY_SECONDS,
        )
        offset_percentage = _first_number(
            config,
            CONFIG_STATE_CHANGE_DELAY_OFFSET_PERCENTAGE,
            LEGACY_CONFIG_DELAY_OFFSET_PERCENTAGE,
            default=DEFAULT_STATE_CHANGE_DELAY_OFFSET_PERCENTAGE,
        )

        error: MockError | None = None
        error_value = config.get(CONFIG_ERROR, config.get(LEGACY_CONFIG_ERROR))
        if isinstance(error_value, str):
            error = MockError.try_parse(error_value)
            if error is None and error_value.strip():
                _log.debug("Ignoring unknown mock error: %s", error_value)
        elif error_value is not None:
            _log.debug("Ignoring invalid type of mock error: %r", error_value)

        scenario: str | None = None
        scenario_value = config.get(CONFIG_SCENARIO)
        if isinstance(scenario_value, str) and scenario_value.strip():
            scenario = scenario_value.strip()
        elif scenario_value is not None:
            _log.debug("Ignoring invalid scenario: %r", scenario_value)

        settings = cls(
            state_change_delay_seconds=max(delay_seconds, 0),
            state_change_delay_offset_percentage=offset_percentage,
            error=error,
            scenario=scenario,
            submission_states=MockSubmissionStates.from_config(
                config.get(CONFIG_SUBMISSION_STATES)
            ),
        )
        _log.debug("Parsed mock settings: %r", settings)
        return settings

    @classmethod
    def from_global_config(cls, config: Mapping[str, object]) -> MockSettings:
        """Parse settings from the outer translation service settings.

        Args:
            config: Settings mapping possibly containing a ``mock`` mapping.

        Returns:
            MockSettings: Parsed settings; defaults if no mock mapping exists.
        """
        mock_config = config.get(CONFIG_MOCK)
        if isinstance(mock_config, Mapping):
            return cls.from_config(mock_config)
        return cls()


class LogSinkConfig(BaseSchema):
    """Configuration for a single log sink."""

    type: LogSinkType = Field(..., description="Log sink type")
    path: str | None = Field(None, min_length=1, description="JSONL file path")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> LogSinkType:
        if isinstance(value, LogSinkType):
            return value
        if isinstance(value, str):
            return LogSinkType(value)
        return value  # type: ignore[return-value]

    @model_validator(mode="after")
    def validate_path(self) -> Self:
        """Ensure file sinks name a path.

        Returns:
            LogSinkConfig: Validated sink configuration.

        Raises:
            ValueError: If a file sink has no path.
        """
        if self.type == LogSinkType.FILE and self.path is None:
            raise ValueError("file log sinks require a path")
        return self


class LoggingConfig(BaseSchema):
    """Logging configuration for facade events."""

    sinks: list[LogSinkConfig] = Field(
        ..., min_length=1, description="Log sinks to enable"
    )

    @model_validator(mode="after")
    def validate_sink_types(self) -> Self:
        """Ensure log sink types are unique.

        Returns:
            LoggingConfig: Validated logging configuration.

        Raises:
            ValueError: If sink types are duplicated.
        """
        sink_types = [sink.type for sink in self.sinks]
        if len(set(sink_types)) != len(sink_types):
            raise ValueError("log sinks must not contain duplicates")
        return self


def _parse_state_list(config: object) -> list[SubmissionState]:
    if isinstance(config, str):
        state = SubmissionState.find(config)
        return [state] if state is not None else []
    if isinstance(config, list | tuple):
        states: list[SubmissionState] = []
        for item in config:
            if not isinstance(item, str):
                continue
            state = SubmissionState.find(item)
            if state is not None:
                states.append(state)
        return states
    return []


def _first_number(config: Mapping[str, object], *keys: str, default: int) -> int:
    for key in keys:
        value = config.get(key)
        if value is None:
            continue
        if isinstance(value, int | float) and not isinstance(value, bool):
            return int(value)
        _log.debug("Ignoring non-numeric value for %s: %r", key, value)
        return default
    return default
