"""The universe of segment/variant combinations."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, Sequence

from .errors import CapacityExceeded, InvalidParameters
from .types import SEGMENTS, VARIANTS, Combination

DEFAULT_ENUMERATION_CEILING = 10_000_000


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_dimensions(segments: int, variants: int) -> None:
    """Raise InvalidParameters unless segments >= 0 and variants > 0."""

    if not _is_int(segments) or not _is_int(variants):
        raise InvalidParameters(
            f"segments and variants must be integers, got {segments!r} and {variants!r}"
        )
    if segments < 0:
        raise InvalidParameters(f"segments must be >= 0, got {segments}")
    if variants <= 0:
        raise InvalidParameters(f"variants must be > 0, got {variants}")


def cardinality(segments: int = SEGMENTS, variants: int = VARIANTS) -> int:
    """Number of distinct combinations, variants ** segments."""

    check_dimensions(segments, variants)
    return variants**segments


def enumerate_all(
    segments: int = SEGMENTS,
    variants: int = VARIANTS,
    ceiling: int = DEFAULT_ENUMERATION_CEILING,
) -> Iterator[Combination]:
    """Lazily yield every combination in lexicographic order.

    Segment 0 is the most significant digit. The size check runs eagerly, so
    CapacityExceeded is raised by this call rather than on first iteration.
    """

    total = cardinality(segments, variants)
    if total > ceiling:
        raise CapacityExceeded(total, ceiling)
    return _count_up(segments, variants)


def _count_up(segments: int, variants: int) -> Iterator[Combination]:
    digits = [0] * segments
    while True:
        yield tuple(digits)
        pos = segments - 1
        while pos >= 0:
            digits[pos] += 1
            if digits[pos] < variants:
                break
            digits[pos] = 0
            pos -= 1
        if pos < 0:
            return


def contains_valid(combination: Sequence[int], segments: int = SEGMENTS, variants: int = VARIANTS) -> bool:
    if len(combination) != segments:
        return False
    return all(_is_int(v) and 0 <= v < variants for v in combination)


@dataclass(frozen=True)
class CombinationSpace:
    """All length-`segments` vectors over range(variants)."""

    segments: int = SEGMENTS
    variants: int = VARIANTS
    ceiling: int = DEFAULT_ENUMERATION_CEILING

    def __post_init__(self) -> None:
        check_dimensions(self.segments, self.variants)

    @property
    def cardinality(self) -> int:
        return self.variants**self.segments

    def enumerate(self) -> Iterator[Combination]:
        return enumerate_all(self.segments, self.variants, self.ceiling)

    def contains(self, combination: Sequence[int]) -> bool:
        return contains_valid(combination, self.segments, self.variants)

    def random_combination(self, rng: random.Random) -> Combination:
        return tuple(rng.randrange(self.variants) for _ in range(self.segments))

    def __contains__(self, combination: object) -> bool:
        return isinstance(combination, (tuple, list)) and self.contains(combination)

    def __iter__(self) -> Iterator[Combination]:
        return self.enumerate()
