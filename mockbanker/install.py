"""
Single-use install/consent prompt.

State machine::

    UNAVAILABLE -> AVAILABLE -> PROMPTING -> RESOLVED(accepted | dismissed)

`prompt()` is the only suspending operation in the application. It waits for
the user's answer, which arrives through `resolve()`. The handle is consumed
once: later `resolve()` calls are no-ops, and calling `prompt()` again returns
the stored outcome without asking.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

from mockbanker.utils.logging import get_logger

log = get_logger(__name__)


class InstallState(str, Enum):
    UNAVAILABLE = "unavailable"
    AVAILABLE = "available"
    PROMPTING = "prompting"
    RESOLVED = "resolved"


class InstallOutcome(str, Enum):
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"


class InstallPrompt:
    def __init__(self) -> None:
        self.state = InstallState.UNAVAILABLE
        self.outcome: Optional[InstallOutcome] = None
        self._answer: Optional[asyncio.Future[InstallOutcome]] = None

    def make_available(self) -> bool:
        """Offer the prompt. Only valid from UNAVAILABLE."""
        if self.state is not InstallState.UNAVAILABLE:
            return False
        self.state = InstallState.AVAILABLE
        return True

    async def prompt(self) -> Optional[InstallOutcome]:
        """
        Show the prompt and wait for the answer.

        Returns None when no prompt is available.
        """
        if self.state is InstallState.RESOLVED:
            return self.outcome
        if self.state is InstallState.UNAVAILABLE:
            return None
        if self._answer is None:
            self._answer = asyncio.get_running_loop().create_future()
            self.state = InstallState.PROMPTING
            log.debug("Install prompt shown")
        return await self._answer

    def resolve(self, accepted: bool) -> bool:
        """Deliver the user's answer. False when there is nothing to resolve."""
        if self.state is not InstallState.PROMPTING or self._answer is None or self._answer.done():
            return False
        self.outcome = InstallOutcome.ACCEPTED if accepted else InstallOutcome.DISMISSED
        self.state = InstallState.RESOLVED
        self._answer.set_result(self.outcome)
        log.info("Install prompt resolved", extra={"outcome": self.outcome.value})
        return True


__all__ = ["InstallPrompt", "InstallState", "InstallOutcome"]
