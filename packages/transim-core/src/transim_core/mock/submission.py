"""Mock submission: an aggregate of tasks with a derived state.

A submission begins STARTED, changes to COMPLETED as soon as all tasks are at
least completed and to DELIVERED as soon as all tasks are delivered. The mock
does not know of jobs (per locale); the facade only deals with submissions
and tasks.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from transim_core.mock.replay import ReplayScenario, build_replay_scenario
from transim_core.mock.task import Task
from transim_core.mock.timeline import Clock, parse_subject_states, system_clock
from transim_schemas.primitives import SubmissionState, TaskState
from transim_schemas.settings import MockSettings, MockSubmissionStates

_log = logging.getLogger(__name__)

_DELIVERED_OR_CONFIRMED = frozenset(
    {TaskState.DELIVERED, TaskState.CANCELLATION_CONFIRMED}
)
_AT_LEAST_COMPLETED = frozenset({TaskState.COMPLETED, TaskState.DELIVERED})


@dataclass(frozen=True, slots=True)
class SubmissionContent:
    """Content which is part of a submission."""

    file_id: str
    file_content: str
    target_locales: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SubmissionStateReading:
    """Aggregated state and the state actually reported."""

    nominal: SubmissionState
    reported: SubmissionState
    replayed: bool = False


def aggregate_submission_state(task_states: Iterable[TaskState]) -> SubmissionState:
    """Derive the submission state from its task states.

    First match wins:

    1. At least one task cancellation-confirmed and all others delivered or
       cancellation-confirmed: CANCELLATION_CONFIRMED.
    2. Any task cancelled: CANCELLED.
    3. All tasks delivered: DELIVERED.
    4. All tasks completed or delivered: COMPLETED.
    5. Otherwise: STARTED.

    Args:
        task_states: Resolved states of all tasks.

    Returns:
        SubmissionState: Aggregated state.
    """
    states = list(task_states)
    if TaskState.CANCELLATION_CONFIRMED in states and all(
        state in _DELIVERED_OR_CONFIRMED for state in states
    ):
        return SubmissionState.CANCELLATION_CONFIRMED
    if TaskState.CANCELLED in states:
        return SubmissionState.CANCELLED
    if all(state == TaskState.DELIVERED for state in states):
        return SubmissionState.DELIVERED
    if all(state in _AT_LEAST_COMPLETED for state in states):
        return SubmissionState.COMPLETED
    return SubmissionState.STARTED


class Submission:
    """Mock submission whose state is controlled by its tasks.

    The subject may control task state switching: a subject of the form
    ``states: <state>, <state>, ...`` schedules the given task states, one
    delay apart, instead of the default single switch to COMPLETED. See
    ``TaskState.parse_csv`` for the parsing rules.
    """

    def __init__(
        self,
        subject: str | None,
        contents: Sequence[SubmissionContent],
        settings: MockSettings,
        *,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
    ) -> None:
        """Create the submission and its tasks.

        Args:
            subject: Subject, possibly carrying a state directive.
            contents: Contents with their target locales.
            settings: Settings for delay and jitter of new tasks.
            clock: Epoch millisecond clock.
            rng: Random source for delay jitter.
        """
        states = parse_subject_states(subject)
        self._tasks: tuple[Task, ...] = tuple(
            Task.create(
                content.file_content,
                locale,
                states=states,
                delay_base_seconds=settings.state_change_delay_seconds,
                delay_offset_percentage=settings.state_change_delay_offset_percentage,
                clock=clock,
                rng=rng,
            )
            for content in contents
            for locale in content.target_locales
        )
        # None: not yet checked for a replay of the current nominal state.
        self._active_replay: ReplayScenario | None = None

    @property
    def tasks(self) -> tuple[Task, ...]:
        """All tasks of the submission."""
        return self._tasks

    def task_states(self) -> list[TaskState]:
        """Resolve the current state of every task."""
        return [task.state for task in self._tasks]

    def get_state(self, submission_states: MockSubmissionStates) -> SubmissionStateReading:
        """Aggregate the task states and apply any state replay.

        Args:
            submission_states: Pointcut configuration used when a new replay
                scenario has to be built.

        Returns:
            SubmissionStateReading: Nominal and reported state.
        """
        nominal = aggregate_submission_state(self.task_states())
        if self._active_replay is None:
            self._active_replay = build_replay_scenario(submission_states, nominal)
            if self._active_replay is None:
                return SubmissionStateReading(nominal, nominal)
            _log.debug("New replay scenario for state %s: %r", nominal, self._active_replay)

        replayed = self._active_replay.next()
        if replayed is None:
            _log.debug("Replay scenario exhausted. Resetting.")
            self._active_replay = None
            return SubmissionStateReading(nominal, nominal)
        _log.debug(
            "Replaying %s instead of %s (left: %s)",
            replayed,
            nominal,
            self._active_replay.remaining,
        )
        return SubmissionStateReading(nominal, replayed, replayed=True)

    def cancel(self) -> None:
        """Cancel all tasks which are not yet delivered."""
        for task in self._tasks:
            task.mark_as_cancelled()

    def get_completed_tasks(self) -> list[Task]:
        """Return tasks currently in state COMPLETED."""
        return self._tasks_in_state(TaskState.COMPLETED)

    def get_cancelled_tasks(self) -> list[Task]:
        """Return tasks currently in state CANCELLED."""
        return self._tasks_in_state(TaskState.CANCELLED)

    def _tasks_in_state(self, state: TaskState) -> list[Task]:
        return [task for task in self._tasks if task.state == state]

    def __repr__(self) -> str:
        return f"Submission(tasks={list(self._tasks)!r})"
