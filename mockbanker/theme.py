"""
Light/dark theme preference persisted under the key "theme".

Without a stored choice the ambient preference applies (the terminal's, as
configured by AMBIENT_THEME).
"""

from __future__ import annotations

from typing import Literal, Optional

from mockbanker.config import get_settings
from mockbanker.infrastructure.kv_store import KeyValueStore
from mockbanker.utils.logging import get_logger

log = get_logger(__name__)

THEME_KEY = "theme"
THEMES = ("light", "dark")

Theme = Literal["light", "dark"]


class ThemePreference:
    def __init__(self, store: KeyValueStore, ambient: Optional[Theme] = None) -> None:
        self._store = store
        self.ambient: Theme = ambient or get_settings().ambient_theme

    @property
    def stored(self) -> Optional[Theme]:
        value = self._store.get(THEME_KEY)
        if value is None:
            return None
        value = value.strip().strip('"')
        if value not in THEMES:
            log.warning("Ignoring unknown stored theme", extra={"value": value})
            return None
        return value  # type: ignore[return-value]

    @property
    def current(self) -> Theme:
        return self.stored or self.ambient

    def set(self, theme: Theme) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme '{theme}'. Available: {', '.join(THEMES)}")
        self._store.set(THEME_KEY, theme)

    def toggle(self) -> Theme:
        theme: Theme = "light" if self.current == "dark" else "dark"
        self.set(theme)
        return theme


__all__ = ["ThemePreference", "Theme", "THEME_KEY", "THEMES"]
