"""Common pytest configuration."""

from __future__ import annotations

import random

import pytest

from tests.helpers.clock import FakeClock


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at a fixed time.

    Returns:
        FakeClock: Clock for deterministic timelines.
    """
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source.

    Returns:
        random.Random: Deterministic random source.
    """
    return random.Random(1234)
