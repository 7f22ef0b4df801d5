"""Owner of the shared mock stores."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping

from pydantic import ValidationError

from transim_core.mock.facade import MockTranslationFacade
from transim_core.mock.stores import ContentStore, SubmissionStore
from transim_core.mock.timeline import Clock, system_clock
from transim_core.ports.facade import ConfigurationError, FacadeErrorDetails
from transim_core.ports.log import LogSinkProtocol
from transim_schemas.settings import MockSettings

_log = logging.getLogger(__name__)

type SettingsSource = MockSettings | Mapping[str, object] | None


def resolve_settings(config: SettingsSource) -> MockSettings:
    """Resolve mock settings from parsed or raw configuration.

    Args:
        config: ``MockSettings``, the raw ``mock`` mapping, or None for
            defaults.

    Returns:
        MockSettings: Validated settings.

    Raises:
        ConfigurationError: If the settings are invalid.
    """
    if config is None:
        return MockSettings()
    if isinstance(config, MockSettings):
        return config
    try:
        return MockSettings.from_config(config)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise ConfigurationError(
            f"Invalid mock settings: {error['msg']}",
            details=FacadeErrorDetails(
                field=field,
                provided=repr(error.get("input")),
                reason=str(exc),
            ),
        ) from exc


class MockBackend:
    """Single owner of the stores shared by all mock facade sessions.

    Every session applies its settings to the shared submission store, so
    the most recently opened session determines delay and replay
    configuration of subsequently created submissions and replays.
    """

    def __init__(
        self,
        *,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
        log_sink: LogSinkProtocol | None = None,
    ) -> None:
        """Initialize the backend with empty stores.

        Args:
            clock: Epoch millisecond clock.
            rng: Random source for delay jitter.
            log_sink: Sink for structured facade events.
        """
        self._submission_store = SubmissionStore(clock=clock, rng=rng)
        self._content_store = ContentStore()
        self._log_sink = log_sink

    @property
    def submission_store(self) -> SubmissionStore:
        """Shared submission repository."""
        return self._submission_store

    @property
    def content_store(self) -> ContentStore:
        """Shared content staging store."""
        return self._content_store

    def open_session(self, config: SettingsSource = None) -> MockTranslationFacade:
        """Apply settings and return a facade over the shared stores.

        Args:
            config: Settings for the session.

        Returns:
            MockTranslationFacade: New facade session.

        Raises:
            ConfigurationError: If the settings are invalid.
        """
        settings = resolve_settings(config)
        self._submission_store.apply_settings(settings)
        _log.debug("Opened mock session with settings %r", settings)
        return MockTranslationFacade(
            settings,
            submission_store=self._submission_store,
            content_store=self._content_store,
            log_sink=self._log_sink,
        )
