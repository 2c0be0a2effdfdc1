"""
Domain models for MockBanker.

Requests, options, history entries and validation verdicts shared by the
pipeline, the registries and the CLI. All models are frozen: a value handed
out by the pipeline or the history log is never mutated afterwards.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_COUNT = 1
MAX_COUNT = 100
RANDOM_LABEL = "Random"

Gender = Literal["male", "female"]
HolderType = Literal["individual", "company"]


def clamp_count(value: int) -> int:
    """Clamp a requested batch size into [MIN_COUNT, MAX_COUNT]."""
    return max(MIN_COUNT, min(MAX_COUNT, int(value)))


class DomainOption(BaseModel):
    """A selectable country or brand."""

    code: str = Field(..., min_length=1, description="Country code or brand id.")
    label: str = Field(..., description="Human-readable name.")
    description: Optional[str] = Field(None, description="Format hint shown next to the option.")

    model_config = ConfigDict(frozen=True)


class GenerationOptions(BaseModel):
    """
    Domain-specific knobs. Registries ignore the ones that do not apply to them.
    """

    gender: Optional[Gender] = None
    year: Optional[int] = None
    holder_type: Optional[HolderType] = None
    spaces: bool = True

    model_config = ConfigDict(frozen=True)


class GenerationRequest(BaseModel):
    """
    One user request. `count` is clamped into [1, 100], never rejected.
    """

    domain: str
    selector: Optional[str] = None
    count: int = 5
    options: GenerationOptions = Field(default_factory=GenerationOptions)

    model_config = ConfigDict(frozen=True)

    @field_validator("count", mode="before")
    @classmethod
    def _clamp(cls, value: int) -> int:
        return clamp_count(value)

    @field_validator("selector", mode="before")
    @classmethod
    def _blank_is_random(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        if not value or value.lower() == RANDOM_LABEL.lower():
            return None
        return value

    @property
    def label(self) -> str:
        """Label recorded in history: the selector, or "Random"."""
        return self.selector or RANDOM_LABEL


class HistoryEntry(BaseModel):
    """
    One logged generation batch.

    The persisted JSON uses the keys `country` and `results`.
    """

    id: str
    timestamp: int = Field(..., ge=0, description="Epoch milliseconds.")
    category: str
    country_or_label: str = Field(..., alias="country")
    count: int = Field(..., ge=0)
    raw_values: List[str] = Field(default_factory=list, alias="results")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ValidationVerdict(BaseModel):
    valid: bool
    message: str

    model_config = ConfigDict(frozen=True)


__all__ = [
    "MIN_COUNT",
    "MAX_COUNT",
    "RANDOM_LABEL",
    "Gender",
    "HolderType",
    "clamp_count",
    "DomainOption",
    "GenerationOptions",
    "GenerationRequest",
    "HistoryEntry",
    "ValidationVerdict",
]
