"""Typed failures raised by the combination core."""

from __future__ import annotations


class CombinationError(Exception):
    """Base class for every combination-core failure."""


class InvalidParameters(CombinationError, ValueError):
    """Segments, variants or count are outside the defined space."""


class CapacityExceeded(CombinationError):
    """Exhaustive enumeration was requested beyond the configured ceiling."""

    def __init__(self, cardinality: int, ceiling: int):
        super().__init__(
            f"cannot enumerate {cardinality:,} combinations (ceiling is {ceiling:,})"
        )
        self.cardinality = cardinality
        self.ceiling = ceiling


class InternalInvariantViolation(CombinationError, RuntimeError):
    """A sampler safety limit tripped; indicates a logic defect."""
