"""
Searchable country/brand selector.

Filtering is a case-insensitive substring match on code or label; an empty
query keeps the original order. Losing focus does not close the panel at once:
the close is scheduled `close_delay_ms` later so that a click on a result,
which arrives after the blur, still lands. Any later state change (select,
focus, input) supersedes the pending close.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional, Protocol, Sequence

from mockbanker.config import get_settings
from mockbanker.domain.models import DomainOption

PLACEHOLDER = "Select country..."


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """The subset of `asyncio.AbstractEventLoop` the selector needs."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


def filter_options(options: Sequence[DomainOption], query: str) -> List[DomainOption]:
    needle = query.lower()
    if not needle:
        return list(options)
    return [
        option
        for option in options
        if needle in option.code.lower() or needle in option.label.lower()
    ]


class SearchableSelector:
    def __init__(
        self,
        options: Sequence[DomainOption],
        on_select: Optional[Callable[[str], None]] = None,
        scheduler: Optional[Scheduler] = None,
        close_delay_ms: Optional[int] = None,
        selected: Optional[str] = None,
        placeholder: str = PLACEHOLDER,
    ) -> None:
        self.options = tuple(options)
        self.on_select = on_select
        self.query = ""
        self.is_open = False
        self.selected = selected
        self.placeholder = placeholder
        self._scheduler = scheduler
        self._close_delay_ms = (
            close_delay_ms if close_delay_ms is not None else get_settings().selector_close_delay_ms
        )
        self._pending: Optional[TimerHandle] = None

    @property
    def results(self) -> List[DomainOption]:
        return filter_options(self.options, self.query)

    @property
    def display_name(self) -> str:
        for option in self.options:
            if option.code == self.selected:
                return f"{option.code} — {option.label}"
        return self.placeholder

    def focus(self) -> None:
        self._cancel_pending()
        self.is_open = True

    def input(self, text: str) -> None:
        self._cancel_pending()
        self.query = text
        self.is_open = True

    def blur(self) -> None:
        self._cancel_pending()
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._pending = scheduler.call_later(self._close_delay_ms / 1000, self._close)

    def select(self, code: str) -> None:
        self._cancel_pending()
        self.selected = code
        self.query = ""
        self.is_open = False
        if self.on_select is not None:
            self.on_select(code)

    def _close(self) -> None:
        self._pending = None
        self.is_open = False

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


__all__ = ["SearchableSelector", "Scheduler", "TimerHandle", "filter_options", "PLACEHOLDER"]
