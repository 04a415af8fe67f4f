"""Unique, uniformly sampled combinations with a load-factor strategy switch."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from .errors import InternalInvariantViolation, InvalidParameters
from .space import DEFAULT_ENUMERATION_CEILING, CombinationSpace, _is_int
from .types import SEGMENTS, VARIANTS, Combination, GenerationRequest

logger = logging.getLogger(__name__)

LOAD_FACTOR_THRESHOLD = 0.5


class Strategy(str, Enum):
    REJECTION = "rejection"
    ENUMERATE_SHUFFLE = "enumerate_shuffle"


@dataclass
class SamplerConfig:
    """Configuration knobs for the sampler."""

    threshold: float = LOAD_FACTOR_THRESHOLD
    enumeration_ceiling: int = DEFAULT_ENUMERATION_CEILING
    max_draws_factor: int = 64


class Sampler:
    """Draws unique combinations from an injected random source."""

    def __init__(self, rng: random.Random | None = None, config: SamplerConfig | None = None):
        self.rng = rng or random.Random()
        self.config = config or SamplerConfig()

    # ------------------------------------------------------------------
    def generate(self, n: int, segments: int = SEGMENTS, variants: int = VARIANTS) -> list[Combination]:
        """Return min(n, variants ** segments) distinct combinations.

        Small requests use rejection sampling; requests covering at least
        `threshold` of the space enumerate it, shuffle, and truncate.
        """

        if not _is_int(n):
            raise InvalidParameters(f"count must be an integer, got {n!r}")
        space = CombinationSpace(segments, variants, self.config.enumeration_ceiling)
        if n <= 0:
            return []
        target = GenerationRequest(n, segments, variants).effective_count
        strategy = self._choose(target, space.cardinality)
        logger.debug(
            "sampling %d of %d combinations via %s", target, space.cardinality, strategy.value
        )
        if strategy is Strategy.REJECTION:
            result = self._rejection(space, target)
        else:
            result = self._enumerate_shuffle(space, target)
        logger.debug("generated %d combinations", len(result))
        return result

    def strategy_for(self, n: int, segments: int = SEGMENTS, variants: int = VARIANTS) -> Strategy:
        space = CombinationSpace(segments, variants, self.config.enumeration_ceiling)
        target = GenerationRequest(n, segments, variants).effective_count
        return self._choose(target, space.cardinality)

    # ------------------------------------------------------------------
    def _choose(self, target: int, total: int) -> Strategy:
        if target < total * self.config.threshold:
            return Strategy.REJECTION
        return Strategy.ENUMERATE_SHUFFLE

    def _rejection(self, space: CombinationSpace, target: int) -> list[Combination]:
        seen: set[Combination] = set()
        picked: list[Combination] = []
        max_draws = self.config.max_draws_factor * target + 1000
        draws = 0
        while len(picked) < target:
            if draws >= max_draws:
                logger.error(
                    "rejection sampling gave up after %d draws with %d/%d unique",
                    draws,
                    len(picked),
                    target,
                )
                raise InternalInvariantViolation(
                    f"rejection sampling exceeded {max_draws} draws for {target} combinations"
                )
            draws += 1
            combo = space.random_combination(self.rng)
            if combo in seen:
                continue
            seen.add(combo)
            picked.append(combo)
        return picked

    def _enumerate_shuffle(self, space: CombinationSpace, target: int) -> list[Combination]:
        universe = list(space.enumerate())
        fisher_yates(universe, self.rng)
        return universe[:target]


def fisher_yates(items: list, rng: random.Random) -> None:
    """Shuffle `items` in place."""

    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def generate(
    n: int,
    segments: int = SEGMENTS,
    variants: int = VARIANTS,
    rng: random.Random | None = None,
) -> list[Combination]:
    return Sampler(rng=rng).generate(n, segments, variants)
