"""
Key-value persistence for MockBanker.

The activity log and the theme preference each live under one logical key.
`KeyValueStore` is the seam they depend on; `InMemoryStore` backs tests and
`JsonFileStore` keeps one file per key under the user's state directory.

There is no locking. Two processes writing the same key race and the later
write wins.
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from mockbanker.config import get_settings
from mockbanker.utils.logging import get_logger

log = get_logger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@runtime_checkable
class KeyValueStore(Protocol):
    """String-keyed blob storage."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored blob or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous blob."""
        ...

    def remove(self, key: str) -> None:
        """Delete `key`. Removing an absent key is not an error."""
        ...


class InMemoryStore:
    """Dictionary-backed store, used by tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)


class JsonFileStore:
    """
    One UTF-8 file per key inside `directory`.

    Writes go to a temporary file first and are moved into place with
    `os.replace`, so a reader never observes a half-written blob.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid store key '{key}'")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Unreadable store entry", extra={"key": key, "error": str(exc)})
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}-", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            _replace(tmp_name, path)
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
        log.debug("Store entry written", extra={"key": key, "path": str(path)})

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
    retry=retry_if_exception_type(PermissionError),
    reraise=True,
)
def _replace(src: str, dst: Path) -> None:
    """
    Move `src` over `dst`, retrying transient sharing violations.

    On Windows `os.replace` fails with PermissionError while another process
    holds the destination open; the condition clears within milliseconds.
    """
    os.replace(src, dst)


def get_store(directory: Path | str | None = None) -> JsonFileStore:
    """
    Build the file store rooted at `directory` or at the configured home dir.
    """
    return JsonFileStore(directory if directory is not None else get_settings().home_dir)


__all__ = ["KeyValueStore", "InMemoryStore", "JsonFileStore", "get_store"]
