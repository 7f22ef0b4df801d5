"""Unit tests for submission state replay."""

import random

from tests.helpers.clock import FakeClock
from transim_core.mock.replay import ReplayScenario, build_replay_scenario
from transim_core.mock.submission import Submission, SubmissionContent
from transim_schemas.primitives import SubmissionState
from transim_schemas.settings import (
    MockSettings,
    MockSubmissionStates,
    StatePointcutConfig,
)


def _states(**pointcuts: StatePointcutConfig) -> MockSubmissionStates:
    return MockSubmissionStates(
        pointcuts={SubmissionState(name): value for name, value in pointcuts.items()}
    )


def _submission(clock: FakeClock) -> Submission:
    return Submission(
        None,
        [SubmissionContent("file-1", "<xliff/>", ("de",))],
        MockSettings(state_change_delay_seconds=1, state_change_delay_offset_percentage=0),
        clock=clock,
        rng=random.Random(0),
    )


def test_replay_queue_drains_in_order() -> None:
    """Ensure a non-final replay returns each state once."""
    replay = ReplayScenario(
        [SubmissionState.OTHER, SubmissionState.COMPLETED], final=False
    )

    assert replay.next() == SubmissionState.OTHER
    assert replay.next() == SubmissionState.COMPLETED
    assert replay.next() is None
    assert replay.remaining == 0


def test_final_replay_freezes_on_last_state() -> None:
    """Ensure a final replay keeps its last state."""
    replay = ReplayScenario(
        [SubmissionState.OTHER, SubmissionState.REDELIVERED], final=True
    )

    assert replay.next() == SubmissionState.OTHER
    for _ in range(3):
        assert replay.next() == SubmissionState.REDELIVERED
    assert replay.remaining == 1


def test_build_replay_scenario_orders_before_override_after() -> None:
    """Ensure the queue is before, override, then after."""
    states = _states(
        COMPLETED=StatePointcutConfig(
            before=[SubmissionState.STARTED],
            override=[SubmissionState.OTHER],
            after=[SubmissionState.REDELIVERED],
        )
    )
    replay = build_replay_scenario(states, SubmissionState.COMPLETED)

    assert replay is not None
    assert [replay.next() for _ in range(3)] == [
        SubmissionState.STARTED,
        SubmissionState.OTHER,
        SubmissionState.REDELIVERED,
    ]


def test_build_replay_scenario_without_override_keeps_state() -> None:
    """Ensure the nominal state is replayed between before and after."""
    states = _states(REVIEW=StatePointcutConfig(before=[SubmissionState.OTHER]))
    replay = build_replay_scenario(states, SubmissionState.REVIEW)

    assert replay is not None
    assert replay.next() == SubmissionState.OTHER
    assert replay.next() == SubmissionState.REVIEW


def test_build_replay_scenario_unconfigured_state() -> None:
    """Ensure states without pointcut have no replay."""
    assert build_replay_scenario(MockSubmissionStates(), SubmissionState.STARTED) is None
    empty = _states(STARTED=StatePointcutConfig())
    assert build_replay_scenario(empty, SubmissionState.STARTED) is None


def test_empty_final_pointcut_freezes_state() -> None:
    """Ensure a final pointcut without states freezes on the state."""
    states = _states(COMPLETED=StatePointcutConfig(final=True))
    replay = build_replay_scenario(states, SubmissionState.COMPLETED)

    assert replay is not None
    assert replay.final
    assert replay.next() == SubmissionState.COMPLETED
    assert replay.next() == SubmissionState.COMPLETED


def test_submission_replays_completed_then_redelivered(clock: FakeClock) -> None:
    """Ensure COMPLETED is followed by REDELIVERED forever."""
    submission = _submission(clock)
    states = _states(
        COMPLETED=StatePointcutConfig(
            after=[SubmissionState.REDELIVERED], final=True
        )
    )
    clock.advance(1)

    first = submission.get_state(states)
    assert first.reported == SubmissionState.COMPLETED
    assert first.replayed
    for _ in range(3):
        clock.advance(3600)
        reading = submission.get_state(states)
        assert reading.nominal == SubmissionState.COMPLETED
        assert reading.reported == SubmissionState.REDELIVERED

    for task in submission.get_completed_tasks():
        task.mark_as_delivered()
    clock.advance(86400)

    reading = submission.get_state(states)
    assert reading.nominal == SubmissionState.DELIVERED
    assert reading.reported == SubmissionState.REDELIVERED


def test_submission_replay_ignores_state_changes_while_active(
    clock: FakeClock,
) -> None:
    """Ensure an active replay is not interrupted by other pointcuts."""
    submission = _submission(clock)
    states = _states(
        STARTED=StatePointcutConfig(
            override=[SubmissionState.OTHER, SubmissionState.OTHER]
        ),
        COMPLETED=StatePointcutConfig(override=[SubmissionState.DELIVERED]),
    )

    assert submission.get_state(states).reported == SubmissionState.OTHER
    clock.advance(1)
    assert submission.get_state(states).reported == SubmissionState.OTHER
    # Exhausted: the nominal state is reported and the replay is reset.
    reading = submission.get_state(states)
    assert reading.reported == SubmissionState.COMPLETED
    assert not reading.replayed
    assert submission.get_state(states).reported == SubmissionState.DELIVERED


def test_submission_without_replay_reports_nominal(clock: FakeClock) -> None:
    """Ensure readings without replay are not flagged."""
    reading = _submission(clock).get_state(MockSubmissionStates())

    assert reading.nominal == reading.reported == SubmissionState.STARTED
    assert not reading.replayed
