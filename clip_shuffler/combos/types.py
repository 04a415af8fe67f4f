"""Shared types and constants for the clip grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Tuple

Combination = Tuple[int, ...]

SEGMENTS = 6
VARIANTS = 5
SEGMENT_DURATION = 5.0  # seconds
TOTAL_DURATION = SEGMENTS * SEGMENT_DURATION
MAX_COMBINATIONS = VARIANTS**SEGMENTS


class Slot(NamedTuple):
    segment: int
    variant: int


@dataclass(frozen=True)
class GenerationRequest:
    """A request for `count` combinations over a segments x variants grid."""

    count: int
    segments: int = SEGMENTS
    variants: int = VARIANTS

    @property
    def effective_count(self) -> int:
        return min(max(self.count, 0), self.variants**self.segments)


@dataclass
class ValidationResult:
    valid: bool
    missing: list[Slot] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "valid": self.valid,
            "missing": [{"segment": s.segment, "variant": s.variant} for s in self.missing],
        }


@dataclass(frozen=True)
class GridStats:
    segments: int
    variants: int
    total_slots: int
    max_combinations: int
    formula_label: str

    def as_dict(self) -> dict:
        return {
            "segments": self.segments,
            "variants": self.variants,
            "total_slots": self.total_slots,
            "max_combinations": self.max_combinations,
            "formula_label": self.formula_label,
        }
