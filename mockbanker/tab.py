"""
One generator tab: owned state plus the messages that change it.

State is never mutated in place. `Tab.dispatch(message)` computes the next
`TabState`, performs the message's effect (generation, clipboard write) and
swaps the state in. The same class serves every domain; what differs lives in
the `DomainDescriptor`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional, Tuple, Union

from mockbanker.descriptors import DomainDescriptor
from mockbanker.domain.models import GenerationOptions, GenerationRequest, clamp_count
from mockbanker.domain.rows import ResultRow
from mockbanker.exporter import ExportArtifact, ExportFormat, copy_all_text, export
from mockbanker.infrastructure.clipboard import copy_to_clipboard
from mockbanker.pipeline import GenerationPipeline


@dataclass(frozen=True)
class TabState:
    domain: str
    selector: Optional[str] = None
    count: int = 5
    options: GenerationOptions = field(default_factory=GenerationOptions)
    rows: Tuple[ResultRow, ...] = ()
    copied_index: Optional[int] = None
    all_copied: bool = False


@dataclass(frozen=True)
class SelectOption:
    code: Optional[str]


@dataclass(frozen=True)
class SetCount:
    count: int


@dataclass(frozen=True)
class SetOptions:
    options: GenerationOptions


@dataclass(frozen=True)
class Generate:
    pass


@dataclass(frozen=True)
class CopyRow:
    index: int


@dataclass(frozen=True)
class CopyAll:
    pass


Message = Union[SelectOption, SetCount, SetOptions, Generate, CopyRow, CopyAll]


class Tab:
    def __init__(
        self,
        descriptor: DomainDescriptor,
        pipeline: GenerationPipeline,
        copy: Callable[[str], None] = copy_to_clipboard,
        count: int = 5,
    ) -> None:
        self.descriptor = descriptor
        self.pipeline = pipeline
        self._copy = copy
        self.state = TabState(
            domain=descriptor.key,
            selector=descriptor.default_selector,
            count=clamp_count(count),
        )

    @property
    def request(self) -> GenerationRequest:
        return GenerationRequest(
            domain=self.descriptor.key,
            selector=self.state.selector,
            count=self.state.count,
            options=self.state.options,
        )

    def dispatch(self, message: Message) -> TabState:
        state = self.state
        if isinstance(message, SelectOption):
            state = replace(state, selector=message.code)
        elif isinstance(message, SetCount):
            state = replace(state, count=clamp_count(message.count))
        elif isinstance(message, SetOptions):
            state = replace(state, options=message.options)
        elif isinstance(message, Generate):
            rows = self.pipeline.run(self.request)
            state = replace(state, rows=rows, copied_index=None, all_copied=False)
        elif isinstance(message, CopyRow):
            if 0 <= message.index < len(state.rows):
                self._copy(state.rows[message.index].display(state.options.spaces))
                state = replace(state, copied_index=message.index, all_copied=False)
        elif isinstance(message, CopyAll):
            if state.rows:
                self._copy(copy_all_text(state.rows, state.options.spaces))
                state = replace(state, copied_index=None, all_copied=True)
        else:
            raise TypeError(f"Unsupported tab message: {message!r}")
        self.state = state
        return state

    def export(self, fmt: ExportFormat) -> ExportArtifact:
        return export(self.descriptor, self.state.rows, fmt, self.state.options.spaces)


__all__ = [
    "Tab",
    "TabState",
    "Message",
    "SelectOption",
    "SetCount",
    "SetOptions",
    "Generate",
    "CopyRow",
    "CopyAll",
]
