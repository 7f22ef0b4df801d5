"""Scenarios intercepting the mock translation facade."""

from __future__ import annotations

from transim_core.scenarios.base import NoOperationScenario, Scenario
from transim_core.scenarios.composite import CompositeScenario, ForcedErrorScenario
from transim_core.scenarios.router import (
    SCENARIO_ALIASES,
    SCENARIOS,
    build_scenario,
    get_scenario,
    list_scenarios,
)

__all__ = [
    "SCENARIOS",
    "SCENARIO_ALIASES",
    "CompositeScenario",
    "ForcedErrorScenario",
    "NoOperationScenario",
    "Scenario",
    "build_scenario",
    "get_scenario",
    "list_scenarios",
]
