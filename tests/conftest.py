"""
Pytest configuration for MockBanker.

Provides fixtures for:
- Seeded entropy sources
- In-memory persistence and a history log over it
- Settings isolated from the user's environment and state directory
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Callable, Generator, List

import pytest

from mockbanker.config import Settings, get_settings
from mockbanker.history import ActivityHistoryLog
from mockbanker.infrastructure.kv_store import InMemoryStore
from mockbanker.pipeline import GenerationPipeline

DEFAULT_SEED = 1234


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch) -> Generator[Settings, None, None]:
    """
    Point the state directory at a temp dir and drop any cached settings.
    """
    monkeypatch.setenv("MOCKBANKER_HOME", str(tmp_path / "home"))
    for name in ("SEED", "LOG_LEVEL", "LOG_JSON", "AMBIENT_THEME", "HISTORY_LIMIT", "DEFAULT_COUNT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(DEFAULT_SEED)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def history_log(store: InMemoryStore) -> ActivityHistoryLog:
    ticks = iter(range(1_000, 10_000_000))
    ids = iter(range(1, 10_000_000))
    return ActivityHistoryLog(
        store,
        clock=lambda: next(ticks),
        id_factory=lambda: f"entry-{next(ids)}",
    )


@pytest.fixture
def pipeline(history_log: ActivityHistoryLog, rng: random.Random) -> GenerationPipeline:
    return GenerationPipeline(history=history_log, rng=rng)


class _FakeHandle:
    def __init__(self, delay: float, callback: Callable[..., Any], args: tuple) -> None:
        self.delay = delay
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records `call_later` requests; `advance()` fires the ones still live."""

    def __init__(self) -> None:
        self.handles: List[_FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _FakeHandle:
        handle = _FakeHandle(delay, callback, args)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[_FakeHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def advance(self) -> None:
        live, self.handles = self.pending, []
        for handle in live:
            handle.callback(*handle.args)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
