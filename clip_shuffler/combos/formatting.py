"""Letter rendering for combinations: labels for display, tokens for filenames."""

from __future__ import annotations

import string
from typing import Sequence

from .errors import InvalidParameters
from .types import Combination

ALPHABET = string.ascii_uppercase
MAX_LETTER_VARIANTS = len(ALPHABET)


def variant_letter(index: int) -> str:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < MAX_LETTER_VARIANTS:
        raise InvalidParameters(
            f"variant index {index!r} has no letter (supported range 0-{MAX_LETTER_VARIANTS - 1})"
        )
    return ALPHABET[index]


def letter_index(letter: str) -> int:
    idx = ALPHABET.find(letter.upper()) if len(letter) == 1 else -1
    if idx < 0:
        raise InvalidParameters(f"not a variant letter: {letter!r}")
    return idx


def to_label(combination: Sequence[int], separator: str = "-") -> str:
    """[0, 2, 1, 4, 3, 0] -> "A-C-B-E-D-A"."""
    return separator.join(variant_letter(v) for v in combination)


def to_token(combination: Sequence[int]) -> str:
    """[0, 2, 1, 4, 3, 0] -> "ACBEDA"."""
    return to_label(combination, separator="")


def parse_token(token: str) -> Combination:
    return tuple(letter_index(ch) for ch in token.strip())


def output_filename(combination: Sequence[int], prefix: str = "video", suffix: str = ".mp4") -> str:
    return f"{prefix}_{to_token(combination)}{suffix}"
