"""Grid completeness checks and descriptive statistics."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np

from .formatting import letter_index
from .space import cardinality, check_dimensions
from .types import SEGMENTS, VARIANTS, GridStats, Slot, ValidationResult

CLIP_EXTENSIONS = (".mp4", ".mov", ".webm", ".m4v")
_CLIP_NAME = re.compile(r"^seg(\d+)_([a-z])$", re.IGNORECASE)


def validate(grid: Sequence[Sequence[object]], segments: int = SEGMENTS, variants: int = VARIANTS) -> ValidationResult:
    """List every empty slot, segment-major then variant."""

    check_dimensions(segments, variants)
    missing: list[Slot] = []
    for seg in range(segments):
        row = grid[seg] if seg < len(grid) else ()
        for var in range(variants):
            value = row[var] if var < len(row) else None
            if not value:
                missing.append(Slot(seg, var))
    return ValidationResult(valid=not missing, missing=missing)


def stats(segments: int = SEGMENTS, variants: int = VARIANTS) -> GridStats:
    total = cardinality(segments, variants)
    return GridStats(
        segments=segments,
        variants=variants,
        total_slots=segments * variants,
        max_combinations=total,
        formula_label=f"{variants}^{segments} = {total:,}",
    )


def load_grid(directory: str | Path, segments: int = SEGMENTS, variants: int = VARIANTS) -> list[list[Path | None]]:
    """Fill a grid from files named like ``seg0_A.mp4`` in `directory`.

    Slots with no matching file stay None. Files outside the grid are ignored.
    """

    check_dimensions(segments, variants)
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"clip directory not found: {root}")
    grid: list[list[Path | None]] = [[None] * variants for _ in range(segments)]
    for path in sorted(root.iterdir()):
        if path.suffix.lower() not in CLIP_EXTENSIONS or not path.is_file():
            continue
        match = _CLIP_NAME.match(path.stem)
        if not match:
            continue
        seg = int(match.group(1))
        var = letter_index(match.group(2))
        if seg < segments and var < variants and grid[seg][var] is None:
            grid[seg][var] = path
    return grid


def usage_matrix(combinations: Iterable[Sequence[int]], segments: int = SEGMENTS, variants: int = VARIANTS) -> np.ndarray:
    """Count how often each variant is picked for each segment."""

    counts = np.zeros((segments, variants), dtype=np.int64)
    for combo in combinations:
        counts[np.arange(segments), np.asarray(combo, dtype=np.int64)] += 1
    return counts


def chi_square(counts: Sequence[float] | np.ndarray) -> float:
    """Pearson statistic of `counts` against a uniform expectation."""

    observed = np.asarray(counts, dtype=np.float64).ravel()
    if observed.size == 0 or observed.sum() == 0:
        return 0.0
    expected = observed.sum() / observed.size
    return float(np.sum((observed - expected) ** 2) / expected)
