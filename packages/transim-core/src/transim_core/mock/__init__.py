"""In-memory mock of the translation backend."""

from transim_core.mock.backend import MockBackend, resolve_settings
from transim_core.mock.facade import MockTranslationFacade
from transim_core.mock.pseudo_translation import translate_text, translate_xliff
from transim_core.mock.replay import ReplayScenario, build_replay_scenario
from transim_core.mock.stores import ContentStore, SubmissionStore
from transim_core.mock.submission import (
    Submission,
    SubmissionContent,
    SubmissionStateReading,
    aggregate_submission_state,
)
from transim_core.mock.task import Task, TaskFlags, TaskResolution, resolve_task_state
from transim_core.mock.timeline import (
    Clock,
    TaskTimeline,
    compute_delay_ms,
    parse_subject_states,
    system_clock,
)

__all__ = [
    "Clock",
    "ContentStore",
    "MockBackend",
    "MockTranslationFacade",
    "ReplayScenario",
    "Submission",
    "SubmissionContent",
    "SubmissionStateReading",
    "SubmissionStore",
    "Task",
    "TaskFlags",
    "TaskResolution",
    "TaskTimeline",
    "aggregate_submission_state",
    "build_replay_scenario",
    "compute_delay_ms",
    "parse_subject_states",
    "resolve_settings",
    "resolve_task_state",
    "system_clock",
    "translate_text",
    "translate_xliff",
]
