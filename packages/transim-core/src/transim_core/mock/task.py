"""Mock task: one content translated into one target locale.

A task has a very simple state concept: completed, delivered, the
cancellation states, and *other* (everything we do not really care about).
The state is never stored. It is resolved on every read from three sticky
flags, set by explicit caller action, and from the task's timeline of
scheduled state changes.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass

from transim_core.mock.timeline import Clock, TaskTimeline, system_clock
from transim_schemas.models import TaskModel
from transim_schemas.primitives import TaskState

_log = logging.getLogger(__name__)

# Seeded from the clock to avoid colliding with IDs of a previous run.
_TASK_IDS = itertools.count(system_clock() + 1)

LATCHED_STATES = frozenset(
    {TaskState.DELIVERED, TaskState.CANCELLED, TaskState.CANCELLATION_CONFIRMED}
)


@dataclass(frozen=True, slots=True)
class TaskFlags:
    """Snapshot of the sticky task flags."""

    delivered: bool = False
    cancelled: bool = False
    cancellation_confirmed: bool = False


@dataclass(frozen=True, slots=True)
class TaskResolution:
    """Resolved task state and the flag to latch, if any."""

    state: TaskState
    latch: TaskState | None = None


def resolve_task_state(
    flags: TaskFlags, timeline: TaskTimeline, now_ms: int
) -> TaskResolution:
    """Resolve the current state of a task.

    Flags take precedence in the order cancellation confirmed, cancelled,
    delivered. Otherwise the latest elapsed timeline entry wins, defaulting
    to OTHER. Timeline results of DELIVERED, CANCELLED and
    CANCELLATION_CONFIRMED are reported as latches; COMPLETED and OTHER
    have no flag and stay purely time-derived.

    Args:
        flags: Current flag snapshot.
        timeline: Scheduled state changes.
        now_ms: Current time in epoch milliseconds.

    Returns:
        TaskResolution: Resolved state and optional latch.
    """
    if flags.cancellation_confirmed:
        return TaskResolution(TaskState.CANCELLATION_CONFIRMED)
    if flags.cancelled:
        return TaskResolution(TaskState.CANCELLED)
    if flags.delivered:
        return TaskResolution(TaskState.DELIVERED)

    state = timeline.state_at(now_ms) or TaskState.OTHER
    if state in LATCHED_STATES:
        return TaskResolution(state, latch=state)
    return TaskResolution(state)


class Task:
    """Mock translation task with a computed state."""

    def __init__(
        self,
        content: str,
        target_locale: str,
        *,
        timeline: TaskTimeline,
        clock: Clock = system_clock,
    ) -> None:
        """Initialize the task.

        Args:
            content: Content to translate (for example XLIFF).
            target_locale: Target locale of the translation.
            timeline: Scheduled state changes.
            clock: Epoch millisecond clock.
        """
        self._task_id = next(_TASK_IDS)
        self._content = content
        self._target_locale = target_locale
        self._timeline = timeline
        self._clock = clock
        self._delivered = False
        self._cancelled = False
        self._cancellation_confirmed = False

    @classmethod
    def create(
        cls,
        content: str,
        target_locale: str,
        *,
        states: tuple[TaskState, ...] = (),
        delay_base_seconds: int,
        delay_offset_percentage: int,
        clock: Clock = system_clock,
        rng: random.Random | None = None,
    ) -> Task:
        """Create a task with a freshly computed timeline.

        Args:
            content: Content to translate.
            target_locale: Target locale of the translation.
            states: Explicit state sequence; empty to auto-complete.
            delay_base_seconds: Base delay in seconds.
            delay_offset_percentage: Jitter bound in percent.
            clock: Epoch millisecond clock.
            rng: Random source; a system random source if omitted.

        Returns:
            Task: The new task.
        """
        timeline = TaskTimeline.build(
            states,
            now_ms=clock(),
            delay_base_seconds=delay_base_seconds,
            delay_offset_percentage=delay_offset_percentage,
            rng=rng or random.SystemRandom(),
        )
        return cls(content, target_locale, timeline=timeline, clock=clock)

    @property
    def task_id(self) -> int:
        """Process-unique task identifier."""
        return self._task_id

    @property
    def content(self) -> str:
        """Untranslated content."""
        return self._content

    @property
    def target_locale(self) -> str:
        """Target locale of the task."""
        return self._target_locale

    @property
    def timeline(self) -> TaskTimeline:
        """Scheduled state changes."""
        return self._timeline

    @property
    def flags(self) -> TaskFlags:
        """Snapshot of the sticky flags."""
        return TaskFlags(
            delivered=self._delivered,
            cancelled=self._cancelled,
            cancellation_confirmed=self._cancellation_confirmed,
        )

    @property
    def state(self) -> TaskState:
        """Resolve the current state, latching time-crossed sticky states."""
        resolution = resolve_task_state(self.flags, self._timeline, self._clock())
        if resolution.latch is not None:
            self._apply_latch(resolution.latch)
        return resolution.state

    def to_model(self) -> TaskModel:
        """Return the task descriptor handed to download consumers."""
        return TaskModel(task_id=self._task_id, locale=self._target_locale)

    def mark_as_delivered(self) -> None:
        """Set the delivered flag."""
        self._delivered = True

    def mark_as_cancelled(self) -> None:
        """Set the cancelled flag unless the task is delivered."""
        if not self._delivered:
            self._cancelled = True

    def mark_as_cancellation_confirmed(self) -> None:
        """Set the cancellation-confirmed flag unless the task is delivered."""
        if not self._delivered:
            self._cancellation_confirmed = True

    def _apply_latch(self, state: TaskState) -> None:
        _log.debug("Task %s: latching time-based state %s", self._task_id, state)
        if state == TaskState.DELIVERED:
            self.mark_as_delivered()
        elif state == TaskState.CANCELLED:
            self.mark_as_cancelled()
        elif state == TaskState.CANCELLATION_CONFIRMED:
            self.mark_as_cancellation_confirmed()

    def __repr__(self) -> str:
        return (
            f"Task(task_id={self._task_id}, target_locale={self._target_locale!r}, "
            f"flags={self.flags}, timeline={self._timeline!r})"
        )
