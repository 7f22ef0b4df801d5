"""Task timelines: scheduled future state transitions of mock tasks."""

from __future__ import annotations

import bisect
import random
import time
from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from transim_schemas.primitives import TaskState

type Clock = Callable[[], int]

SUBJECT_STATES_PREFIX = "states:"


def system_clock() -> int:
    """Return the current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def compute_delay_ms(
    delay_base_seconds: int,
    delay_offset_percentage: int,
    rng: random.Random,
) -> int:
    """Compute a jittered delay.

    The delay is ``base_ms + base_ms * r / 100`` with ``r`` drawn uniformly
    from ``[-offset, +offset]``. With an offset of zero the delay is exactly
    the base.

    Args:
        delay_base_seconds: Base delay in seconds.
        delay_offset_percentage: Symmetric jitter bound in percent (0-100).
        rng: Random source.

    Returns:
        int: Delay in milliseconds.
    """
    base_ms = delay_base_seconds * 1000
    if delay_offset_percentage <= 0:
        return base_ms
    offset = rng.uniform(-delay_offset_percentage, delay_offset_percentage)
    return base_ms + int(base_ms * offset / 100)


def parse_subject_states(subject: str | None) -> tuple[TaskState, ...]:
    """Parse the state directive from a submission subject.

    A subject such as ``"states: other, cancelled"`` requests an explicit
    task state sequence. Any other subject requests the default behavior.

    Args:
        subject: Submission subject.

    Returns:
        tuple[TaskState, ...]: Requested states; empty for default behavior.
    """
    if not subject:
        return ()
    lower_subject = subject.strip().lower()
    if not lower_subject.startswith(SUBJECT_STATES_PREFIX):
        return ()
    return TaskState.parse_csv(lower_subject.removeprefix(SUBJECT_STATES_PREFIX))


class TimelineEntry(NamedTuple):
    """A state to apply once the given time has passed."""

    at_ms: int
    state: TaskState


class TaskTimeline:
    """Timestamp-ordered sequence of scheduled task states.

    Entries with equal timestamps keep their insertion order, so the later
    inserted entry wins on resolution.
    """

    def __init__(self, entries: Iterable[TimelineEntry] = ()) -> None:
        self._entries: list[TimelineEntry] = []
        for entry in entries:
            self.add(entry.at_ms, entry.state)

    @classmethod
    def build(
        cls,
        states: tuple[TaskState, ...],
        *,
        now_ms: int,
        delay_base_seconds: int,
        delay_offset_percentage: int,
        rng: random.Random,
    ) -> TaskTimeline:
        """Build the timeline for a new task.

        Without explicit states the task completes once after one delay.
        Otherwise each state is scheduled one independently jittered delay
        after its predecessor.

        Args:
            states: Explicitly requested states, possibly empty.
            now_ms: Creation time in epoch milliseconds.
            delay_base_seconds: Base delay in seconds.
            delay_offset_percentage: Jitter bound in percent.
            rng: Random source.

        Returns:
            TaskTimeline: The scheduled timeline.
        """
        timeline = cls()
        scheduled = states or (TaskState.COMPLETED,)
        at_ms = now_ms
        for state in scheduled:
            at_ms += compute_delay_ms(
                delay_base_seconds, delay_offset_percentage, rng
            )
            timeline.add(at_ms, state)
        return timeline

    def add(self, at_ms: int, state: TaskState) -> None:
        """Schedule a state at the given time."""
        bisect.insort_right(
            self._entries, TimelineEntry(at_ms, state), key=lambda e: e.at_ms
        )

    def state_at(self, now_ms: int) -> TaskState | None:
        """Return the latest elapsed state, or None if nothing has elapsed."""
        index = bisect.bisect_right(self._entries, now_ms, key=lambda e: e.at_ms)
        if index == 0:
            return None
        return self._entries[index - 1].state

    def __iter__(self) -> Iterator[TimelineEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TaskTimeline({self._entries!r})"
