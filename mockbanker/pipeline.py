"""
Generation pipeline: turns a request into a row snapshot and logs the batch.

Usage:
    from mockbanker.pipeline import GenerationPipeline
    from mockbanker.domain import GenerationRequest

    pipeline = GenerationPipeline(history=log, rng=random.Random(7))
    rows = pipeline.run(GenerationRequest(domain="iban", selector="DE", count=5))

The registry is called exactly `count` times. An attempt that yields nothing
is skipped, not retried, so a snapshot may hold fewer rows than requested
(none at all for an unsupported selector). That is not an error.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional, Tuple

from mockbanker.descriptors import DomainDescriptor, resolve_domain
from mockbanker.domain.models import GenerationRequest, HistoryEntry
from mockbanker.domain.rows import ResultRow
from mockbanker.history import ActivityHistoryLog
from mockbanker.utils.logging import get_logger

log = get_logger(__name__)


class PipelineState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"


class GenerationPipeline:
    """
    Drives one domain registry per request.

    Parameters
    ----------
    history : ActivityHistoryLog | None
        Receives one entry per batch. None disables logging (useful in tests
        that only look at rows).
    rng : random.Random | None
        Entropy source. Seed it for reproducible batches.
    """

    def __init__(
        self,
        history: Optional[ActivityHistoryLog] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.history = history
        self.rng = rng or random.Random()
        self.state = PipelineState.IDLE
        self.snapshot: Tuple[ResultRow, ...] = ()
        self.last_entry: Optional[HistoryEntry] = None

    def run(self, request: GenerationRequest) -> Tuple[ResultRow, ...]:
        descriptor = resolve_domain(request.domain)
        self.state = PipelineState.GENERATING
        rows = self._generate(descriptor, request)
        self.snapshot = rows
        self.state = PipelineState.READY

        log.info(
            f"[BATCH] {descriptor.key}",
            extra={
                "domain": descriptor.key,
                "selector": request.label,
                "requested": request.count,
                "produced": len(rows),
            },
        )
        if self.history is not None:
            # count is the requested size, even when fewer rows came back
            self.last_entry = self.history.record(
                category=descriptor.category,
                label=request.label,
                count=request.count,
                raw_values=[row.primary_value for row in rows],
            )
        return rows

    def _generate(
        self,
        descriptor: DomainDescriptor,
        request: GenerationRequest,
    ) -> Tuple[ResultRow, ...]:
        registry = descriptor.registry()
        rows = []
        for attempt in range(request.count):
            row = registry.generate(request.selector, request.options, self.rng)
            if row is None:
                log.debug(
                    "Generation attempt skipped",
                    extra={"domain": descriptor.key, "selector": request.label, "attempt": attempt},
                )
                continue
            rows.append(row)
        return tuple(rows)


__all__ = ["GenerationPipeline", "PipelineState"]
