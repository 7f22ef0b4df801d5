"""Facade providers selected by the ``type`` setting."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from transim_core.disabled import DisabledTranslationFacade
from transim_core.mock.backend import MockBackend
from transim_core.ports.facade import (
    ConfigurationError,
    FacadeErrorDetails,
    TranslationFacadeProtocol,
)
from transim_schemas.settings import CONFIG_MOCK

_log = logging.getLogger(__name__)

CONFIG_TYPE = "type"
MOCK_TYPE_TOKEN = "mock"
DISABLED_TYPE_TOKEN = "disabled"

type FacadeProvider = Callable[[Mapping[str, object], MockBackend], TranslationFacadeProtocol]


def _mock_provider(
    config: Mapping[str, object], backend: MockBackend
) -> TranslationFacadeProtocol:
    mock_config = config.get(CONFIG_MOCK)
    if not isinstance(mock_config, Mapping):
        if mock_config is not None:
            _log.debug("Ignoring invalid mock settings: %r", mock_config)
        mock_config = None
    return backend.open_session(mock_config)


def _disabled_provider(
    config: Mapping[str, object], backend: MockBackend
) -> TranslationFacadeProtocol:
    return DisabledTranslationFacade()


PROVIDERS: dict[str, FacadeProvider] = {
    MOCK_TYPE_TOKEN: _mock_provider,
    DISABLED_TYPE_TOKEN: _disabled_provider,
}


def open_facade(
    config: Mapping[str, object], backend: MockBackend
) -> TranslationFacadeProtocol:
    """Open a facade session for the configured facade type.

    The type defaults to ``mock`` when not configured.

    Args:
        config: Translation service settings with ``type`` and ``mock`` keys.
        backend: Backend owning the shared mock stores.

    Returns:
        TranslationFacadeProtocol: Facade for the configured type.

    Raises:
        ConfigurationError: If the type is unknown or the settings are invalid.
    """
    type_value = config.get(CONFIG_TYPE, MOCK_TYPE_TOKEN)
    type_token = str(type_value).strip().lower()
    provider = PROVIDERS.get(type_token)
    if provider is None:
        raise ConfigurationError(
            f"Unknown facade type: {type_value}",
            details=FacadeErrorDetails(
                field=CONFIG_TYPE,
                provided=str(type_value),
                reason=f"Expected one of: {', '.join(sorted(PROVIDERS))}",
            ),
        )
    return provider(config, backend)
