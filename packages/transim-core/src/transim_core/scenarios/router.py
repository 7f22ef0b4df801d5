"""Scenario registry and lookup by id."""

from __future__ import annotations

import logging

from transim_core.scenarios.base import NoOperationScenario, Scenario
from transim_core.scenarios.composite import CompositeScenario, ForcedErrorScenario
from transim_core.scenarios.outage import (
    CancellationNotFoundScenario,
    GccOutageOnCancellationScenario,
    GccOutageOnDownloadScenario,
    GccOutageOnUploadScenario,
)
from transim_core.scenarios.submission import (
    FullRegularApprovalStateFlowScenario,
    SubmissionCanceledByGlobalLinkScenario,
    SubmissionErrorScenario,
    SubmissionRedeliveredScenario,
)
from transim_core.scenarios.translation import (
    TranslateDoesNotExistScenario,
    TranslateEmptyTransunitTargetScenario,
    TranslateInvalidContentIdScenario,
    TranslateInvalidXliffScenario,
    TranslateStringTooLongScenario,
)
from transim_schemas.primitives import MockError
from transim_schemas.settings import MockSettings

_log = logging.getLogger(__name__)

SCENARIOS: dict[str, type[Scenario]] = {
    scenario.id: scenario
    for scenario in (
        NoOperationScenario,
        GccOutageOnUploadScenario,
        GccOutageOnDownloadScenario,
        GccOutageOnCancellationScenario,
        CancellationNotFoundScenario,
        SubmissionCanceledByGlobalLinkScenario,
        SubmissionErrorScenario,
        SubmissionRedeliveredScenario,
        FullRegularApprovalStateFlowScenario,
        TranslateInvalidXliffScenario,
        TranslateEmptyTransunitTargetScenario,
        TranslateStringTooLongScenario,
        TranslateInvalidContentIdScenario,
        TranslateDoesNotExistScenario,
    )
}

# Spellings used by earlier configurations.
SCENARIO_ALIASES: dict[str, str] = {
    "gcc-outage-on-cancelation": GccOutageOnCancellationScenario.id,
    "cancelation-not-found": CancellationNotFoundScenario.id,
}


def list_scenarios() -> list[type[Scenario]]:
    """Return all registered scenario classes ordered by id."""
    return [SCENARIOS[scenario_id] for scenario_id in sorted(SCENARIOS)]


def get_scenario(scenario_id: str | None) -> Scenario | None:
    """Create a fresh scenario instance by id.

    Lookup ignores case and surrounding whitespace.

    Args:
        scenario_id: Scenario id or legacy alias.

    Returns:
        Scenario | None: New scenario instance, None for blank or unknown ids.
    """
    if scenario_id is None or not scenario_id.strip():
        return None
    key = scenario_id.strip().lower()
    scenario_cls = SCENARIOS.get(SCENARIO_ALIASES.get(key, key))
    if scenario_cls is None:
        return None
    return scenario_cls()


def build_scenario(settings: MockSettings) -> Scenario:
    """Build the scenario configured by mock settings.

    Unknown scenario ids are logged and fall back to no operation. A forced
    error selector is applied before the configured scenario.

    Args:
        settings: Mock settings.

    Returns:
        Scenario: Scenario to use for a facade session.
    """
    scenarios: list[Scenario] = []
    if settings.error is not None:
        scenarios.append(ForcedErrorScenario(MockError(settings.error)))
    if settings.scenario is not None:
        scenario = get_scenario(settings.scenario)
        if scenario is None:
            _log.warning(
                "Unknown scenario '%s'. Falling back to no operation.",
                settings.scenario,
            )
        else:
            scenarios.append(scenario)

    if not scenarios:
        return NoOperationScenario()
    if len(scenarios) == 1:
        return scenarios[0]
    return CompositeScenario(scenarios)
