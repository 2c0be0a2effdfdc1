"""
Bounded, persisted activity log of generation batches.

The whole log is one JSON array under the key "history", newest entry first.
Every `append` re-reads the stored blob, prepends, truncates and writes the
full array back. Nothing coordinates concurrent writers: if two processes
append at the same time, the later write wins.
"""

from __future__ import annotations

import secrets
import time
from typing import Callable, List, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from mockbanker.domain.models import HistoryEntry
from mockbanker.infrastructure.kv_store import KeyValueStore
from mockbanker.utils.logging import get_logger

log = get_logger(__name__)

HISTORY_KEY = "history"
DEFAULT_LIMIT = 50

_ENTRIES = TypeAdapter(List[HistoryEntry])


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return str(secrets.randbits(64))


class ActivityHistoryLog:
    """
    History entries over an injected `KeyValueStore`.

    `limit` is capped at DEFAULT_LIMIT.

    `entries` is the in-memory view; it reflects `clear()` immediately,
    independent of the store.
    """

    def __init__(
        self,
        store: KeyValueStore,
        limit: int = DEFAULT_LIMIT,
        clock: Callable[[], int] = _now_ms,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self.limit = max(1, min(limit, DEFAULT_LIMIT))
        self._clock = clock
        self._id_factory = id_factory
        self._entries: List[HistoryEntry] = []

    @property
    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def load(self) -> List[HistoryEntry]:
        """
        Read the persisted log. A missing or malformed blob reads as empty.
        """
        blob = self._store.get(HISTORY_KEY)
        if blob is None:
            self._entries = []
        else:
            try:
                self._entries = _ENTRIES.validate_json(blob)
            except ValidationError as exc:
                log.warning(
                    "Discarding unreadable history",
                    extra={"key": HISTORY_KEY, "errors": exc.error_count()},
                )
                self._entries = []
        return self.entries

    def append(self, entry: HistoryEntry) -> List[HistoryEntry]:
        """Prepend `entry`, keep the `limit` newest entries and persist."""
        entries = [entry, *self.load()][: self.limit]
        self._entries = entries
        self._store.set(HISTORY_KEY, _ENTRIES.dump_json(entries, by_alias=True).decode("utf-8"))
        log.debug("History appended", extra={"category": entry.category, "size": len(entries)})
        return self.entries

    def record(
        self,
        category: str,
        label: str,
        count: int,
        raw_values: Sequence[str],
    ) -> HistoryEntry:
        """Build an entry stamped with a fresh id and the current time, then append it."""
        entry = HistoryEntry(
            id=self._id_factory(),
            timestamp=self._clock(),
            category=category,
            country_or_label=label,
            count=count,
            raw_values=list(raw_values),
        )
        self.append(entry)
        return entry

    def clear(self) -> None:
        self._entries = []
        self._store.remove(HISTORY_KEY)
        log.info("History cleared")


__all__ = ["ActivityHistoryLog", "HISTORY_KEY", "DEFAULT_LIMIT"]
