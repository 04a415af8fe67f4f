"""Combination sampling utilities for segment/variant clip grids."""

from .errors import CapacityExceeded, CombinationError, InternalInvariantViolation, InvalidParameters
from .formatting import output_filename, to_label, to_token
from .grid import stats, validate
from .sampler import Sampler, SamplerConfig, generate
from .space import CombinationSpace, cardinality, contains_valid, enumerate_all

__all__ = [
    "CapacityExceeded",
    "CombinationError",
    "CombinationSpace",
    "InternalInvariantViolation",
    "InvalidParameters",
    "Sampler",
    "SamplerConfig",
    "cardinality",
    "contains_valid",
    "enumerate_all",
    "generate",
    "output_filename",
    "stats",
    "to_label",
    "to_token",
    "validate",
]
