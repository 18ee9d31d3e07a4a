"""Shared fixtures: a controllable clock and a fake profile fetcher."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from core.cache import MemoryCache
from fetchers.kirka import FetchResponse

ORIGIN = "https://kirka.io"


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> MemoryCache:
    return MemoryCache(clock=clock)


@pytest.fixture
def make_fetcher():
    """Build a fetcher mock that answers every URL with the given page."""

    def _make(text: str = "", status: int = 200) -> MagicMock:
        return MagicMock(return_value=FetchResponse(status=status, text=text))

    return _make
