"""Unit tests for the in-memory content and submission stores."""

import io
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from tests.helpers.clock import FakeClock
from transim_core.mock.stores import (
    ContentStore,
    SubmissionStore,
    read_content_source,
)
from transim_core.mock.submission import SubmissionContent
from transim_core.ports.facade import (
    ContentIOError,
    ContentNotFoundError,
    SubmissionNotFoundError,
)
from transim_schemas.primitives import SubmissionState
from transim_schemas.settings import MockSettings


def _store(clock: FakeClock, delay_seconds: int = 1) -> SubmissionStore:
    return SubmissionStore(
        MockSettings(
            state_change_delay_seconds=delay_seconds,
            state_change_delay_offset_percentage=0,
        ),
        clock=clock,
        rng=random.Random(0),
    )


def _contents() -> list[SubmissionContent]:
    return [SubmissionContent("file-1", "<xliff/>", ("de", "fr"))]


def test_read_content_source_variants(tmp_path: Path) -> None:
    """Ensure text, bytes, paths and streams are read."""
    path = tmp_path / "content.xlf"
    path.write_text("päth", encoding="utf-8")

    assert read_content_source("text") == "text"
    assert read_content_source("bÿtes".encode()) == "bÿtes"
    assert read_content_source(path) == "päth"
    assert read_content_source(io.BytesIO(b"stream")) == "stream"


def test_read_content_source_wraps_io_errors(tmp_path: Path) -> None:
    """Ensure unreadable sources raise ContentIOError."""
    with pytest.raises(ContentIOError):
        read_content_source(tmp_path / "missing.xlf")
    with pytest.raises(ContentIOError):
        read_content_source(b"\xff\xfe\xfa")


def test_content_store_consumes_content_once() -> None:
    """Ensure staged content can be removed exactly once."""
    store = ContentStore()
    handle = store.add_content("<xliff/>")

    assert len(store) == 1
    assert store.remove_content(handle) == "<xliff/>"
    assert len(store) == 0
    with pytest.raises(ContentNotFoundError) as exc_info:
        store.remove_content(handle)
    assert exc_info.value.info.details is not None
    assert exc_info.value.info.details.content_handle == handle


def test_content_handles_are_unique() -> None:
    """Ensure each upload gets a fresh handle."""
    store = ContentStore()

    assert store.add_content("a") != store.add_content("a")


def test_submission_ids_are_sequential(clock: FakeClock) -> None:
    """Ensure submission identifiers are assigned in order."""
    store = _store(clock)

    assert store.add_submission("a", _contents()) == 0
    assert store.add_submission("b", _contents()) == 1
    assert len(store) == 2


def test_unknown_submission_raises(clock: FakeClock) -> None:
    """Ensure every lookup of an unknown submission fails."""
    store = _store(clock)

    with pytest.raises(SubmissionNotFoundError):
        store.get_submission_state(7)
    with pytest.raises(SubmissionNotFoundError):
        store.cancel_submission(7)
    with pytest.raises(SubmissionNotFoundError):
        store.get_completed_tasks(7)
    with pytest.raises(SubmissionNotFoundError) as exc_info:
        store.get_cancelled_tasks(7)
    assert exc_info.value.info.details is not None
    assert exc_info.value.info.details.submission_id == 7


def test_submission_lifecycle(clock: FakeClock) -> None:
    """Ensure a submission completes and is cancelled through the store."""
    store = _store(clock)
    submission_id = store.add_submission(None, _contents())

    assert store.get_submission_state(submission_id).reported == (
        SubmissionState.STARTED
    )
    clock.advance(1)
    assert len(store.get_completed_tasks(submission_id)) == 2

    store.cancel_submission(submission_id)
    assert len(store.get_cancelled_tasks(submission_id)) == 2
    assert store.get_submission_state(submission_id).reported == (
        SubmissionState.CANCELLED
    )


def test_applied_settings_affect_new_submissions(clock: FakeClock) -> None:
    """Ensure new settings apply to subsequently created submissions."""
    store = _store(clock, delay_seconds=10)
    slow = store.add_submission(None, _contents())
    store.apply_settings(
        MockSettings(state_change_delay_seconds=0, state_change_delay_offset_percentage=0)
    )
    fast = store.add_submission(None, _contents())

    assert store.settings.state_change_delay_seconds == 0
    assert store.get_submission_state(fast).reported == SubmissionState.COMPLETED
    assert store.get_submission_state(slow).reported == SubmissionState.STARTED


def test_remove_contents_is_all_or_nothing() -> None:
    """Ensure no content is removed when one handle is unknown."""
    store = ContentStore()
    first = store.add_content("first")
    second = store.add_content("second")

    with pytest.raises(ContentNotFoundError) as exc_info:
        store.remove_contents([first, "missing"])
    assert exc_info.value.info.details is not None
    assert exc_info.value.info.details.content_handle == "missing"
    assert len(store) == 2

    assert store.remove_contents([first, second]) == {
        first: "first",
        second: "second",
    }
    assert len(store) == 0


def test_content_store_consumes_each_handle_once_under_contention() -> None:
    """Ensure racing consumers never receive the same content twice."""
    store = ContentStore()
    expected = [f"content-{index}" for index in range(50)]
    handles = [store.add_content(content) for content in expected]
    workers = 8
    barrier = threading.Barrier(workers)

    def consume() -> list[str]:
        barrier.wait()
        taken: list[str] = []
        for handle in handles:
            try:
                taken.append(store.remove_content(handle))
            except ContentNotFoundError:
                continue
        return taken

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(consume) for _ in range(workers)]
        taken = [content for future in futures for content in future.result()]

    assert sorted(taken) == sorted(expected)
    assert len(store) == 0


def test_submission_store_under_concurrent_access(clock: FakeClock) -> None:
    """Ensure parallel submit, query and cancel keep identifiers dense."""
    store = _store(clock)
    workers = 8
    per_worker = 25
    barrier = threading.Barrier(workers)

    def run() -> list[int]:
        barrier.wait()
        submission_ids: list[int] = []
        for _ in range(per_worker):
            submission_id = store.add_submission(None, _contents())
            store.get_submission_state(submission_id)
            store.get_submission_state(0)
            store.cancel_submission(submission_id)
            submission_ids.append(submission_id)
        return submission_ids

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(run) for _ in range(workers)]
        submission_ids = [sid for future in futures for sid in future.result()]

    assert sorted(submission_ids) == list(range(workers * per_worker))
    assert len(store) == workers * per_worker
    assert all(
        store.get_submission_state(submission_id).reported
        == SubmissionState.CANCELLED
        for submission_id in submission_ids
    )
