"""Unit tests for task timelines and delay computation."""

import random

from transim_core.mock.timeline import (
    TaskTimeline,
    compute_delay_ms,
    parse_subject_states,
)
from transim_schemas.primitives import TaskState


def test_compute_delay_without_offset_is_exact() -> None:
    """Ensure a zero offset yields the base delay."""
    assert compute_delay_ms(2, 0, random.Random(1)) == 2000


def test_compute_delay_stays_within_offset_bounds() -> None:
    """Ensure jittered delays stay within the configured percentage."""
    rng = random.Random(42)
    for _ in range(200):
        delay = compute_delay_ms(10, 50, rng)
        assert 5000 <= delay <= 15000


def test_compute_delay_zero_base() -> None:
    """Ensure a zero base delay stays zero regardless of jitter."""
    assert compute_delay_ms(0, 100, random.Random(3)) == 0


def test_parse_subject_states() -> None:
    """Ensure only subjects with the states prefix request states."""
    assert parse_subject_states(None) == ()
    assert parse_subject_states("Translate homepage") == ()
    assert parse_subject_states("  States: other, Cancelled ") == (
        TaskState.OTHER,
        TaskState.CANCELLED,
    )
    assert parse_subject_states("states:") == ()


def test_build_default_timeline_completes_once() -> None:
    """Ensure the default timeline contains a single COMPLETED entry."""
    timeline = TaskTimeline.build(
        (),
        now_ms=1000,
        delay_base_seconds=3,
        delay_offset_percentage=0,
        rng=random.Random(1),
    )

    assert [(entry.at_ms, entry.state) for entry in timeline] == [
        (4000, TaskState.COMPLETED)
    ]


def test_build_explicit_timeline_is_cumulative() -> None:
    """Ensure explicit states are scheduled one delay apart."""
    timeline = TaskTimeline.build(
        (TaskState.OTHER, TaskState.CANCELLED, TaskState.DELIVERED),
        now_ms=0,
        delay_base_seconds=2,
        delay_offset_percentage=0,
        rng=random.Random(1),
    )

    assert [entry.at_ms for entry in timeline] == [2000, 4000, 6000]
    assert len(timeline) == 3


def test_state_at_resolves_latest_elapsed_entry() -> None:
    """Ensure resolution picks the latest entry at or before now."""
    timeline = TaskTimeline()
    timeline.add(2000, TaskState.COMPLETED)
    timeline.add(1000, TaskState.OTHER)

    assert timeline.state_at(999) is None
    assert timeline.state_at(1000) == TaskState.OTHER
    assert timeline.state_at(1999) == TaskState.OTHER
    assert timeline.state_at(2000) == TaskState.COMPLETED


def test_equal_timestamps_resolve_to_last_inserted() -> None:
    """Ensure the later inserted entry wins on equal timestamps."""
    timeline = TaskTimeline()
    timeline.add(1000, TaskState.OTHER)
    timeline.add(1000, TaskState.CANCELLED)

    assert timeline.state_at(1000) == TaskState.CANCELLED
