"""Field configuration for the matcher.

Options are validated once at construction. Invalid values raise
``pydantic.ValidationError`` instead of being clamped so that caller
mistakes surface immediately.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
import math
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SearchField(str, Enum):
    """Fields recognised by the indexer and matcher."""

    NAME = "name"
    CONTENT = "content"


DEFAULT_FIELD_WEIGHTS: Mapping[SearchField, float] = MappingProxyType(
    {
        SearchField.NAME: 0.5,
        SearchField.CONTENT: 0.5,
    }
)
DEFAULT_THRESHOLD = 0.95
DEFAULT_SNIPPET_LENGTH = 80


class SearchOptions(BaseModel):
    """Weights, threshold and display bounds for one search call."""

    model_config = ConfigDict(frozen=True)

    field_weights: Mapping[SearchField, float] = Field(
        default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS),
        validate_default=True,
    )
    threshold: float = Field(
        default=DEFAULT_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Maximum tolerated distance between query and document",
    )
    snippet_length: int = Field(default=DEFAULT_SNIPPET_LENGTH, ge=1)
    limit: int | None = Field(default=None, ge=1)

    @field_validator("field_weights")
    @classmethod
    def _check_weights(cls, weights: Mapping[SearchField, float]) -> Mapping[SearchField, float]:
        for search_field, weight in weights.items():
            if not math.isfinite(weight):
                raise ValueError(f"weight for {search_field.value!r} must be finite")
            if weight < 0:
                raise ValueError(f"weight for {search_field.value!r} must be non-negative, got {weight}")
        if not any(weight > 0 for weight in weights.values()):
            raise ValueError("at least one field must have a positive weight")
        # Read-only copy; frozen=True alone does not stop item assignment.
        return MappingProxyType(dict(weights))

    @field_validator("threshold")
    @classmethod
    def _check_threshold(cls, threshold: float) -> float:
        if math.isnan(threshold):
            raise ValueError("threshold must be a number")
        return threshold

    def active_weights(self) -> tuple[tuple[SearchField, float], ...]:
        """Return positively weighted fields in declaration order."""
        return tuple(
            (search_field, self.field_weights[search_field])
            for search_field in SearchField
            if self.field_weights.get(search_field, 0.0) > 0
        )

    @property
    def total_weight(self) -> float:
        return sum(weight for _, weight in self.active_weights())
