"""State replay: scripted sequences of reported submission states."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable

from transim_schemas.primitives import SubmissionState
from transim_schemas.settings import MockSubmissionStates

_log = logging.getLogger(__name__)


class ReplayScenario:
    """Queue of states to report instead of the aggregated state.

    If ``final`` is set, the last state is never removed and is reported on
    every subsequent query.
    """

    def __init__(self, states: Iterable[SubmissionState], *, final: bool) -> None:
        """Initialize the replay scenario.

        Args:
            states: States to replay in order.
            final: Whether the last state is frozen once reached.
        """
        self._states: deque[SubmissionState] = deque(states)
        self._final = final

    @property
    def final(self) -> bool:
        """Whether the last state is frozen."""
        return self._final

    @property
    def remaining(self) -> int:
        """Number of states left."""
        return len(self._states)

    def next(self) -> SubmissionState | None:
        """Return the next state to replay; None once exhausted."""
        if not self._states:
            _log.debug("No more states available in replay scenario.")
            return None
        if self._final and len(self._states) == 1:
            return self._states[0]
        return self._states.popleft()

    def __repr__(self) -> str:
        return f"ReplayScenario(states={list(self._states)!r}, final={self._final})"


def build_replay_scenario(
    submission_states: MockSubmissionStates, state: SubmissionState
) -> ReplayScenario | None:
    """Build the replay scenario configured for a nominal state.

    The queue is ``before + (override or [state]) + after``. A pointcut
    without any states but with ``final`` freezes on the state itself.

    Args:
        submission_states: Pointcut configuration.
        state: Nominal (aggregated) submission state.

    Returns:
        ReplayScenario | None: Scenario, or None if nothing is configured.
    """
    pointcut = submission_states.get(state)
    if pointcut is None:
        return None

    if pointcut.is_empty():
        if pointcut.final:
            return ReplayScenario([state], final=True)
        return None

    states: list[SubmissionState] = list(pointcut.before)
    if pointcut.override:
        states.extend(pointcut.override)
    else:
        states.append(state)
    states.extend(pointcut.after)
    return ReplayScenario(
        [SubmissionState(item) for item in states], final=pointcut.final
    )
