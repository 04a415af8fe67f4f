"""Shared fixtures for the clip_shuffler tests."""

import random

import pytest

from combos.formatting import variant_letter


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def full_grid():
    return [[f"seg{s}_{variant_letter(v)}.mp4" for v in range(5)] for s in range(6)]


@pytest.fixture
def clip_dir(tmp_path):
    """A directory with all 30 clips of the default grid."""
    root = tmp_path / "clips"
    root.mkdir()
    for seg in range(6):
        for var in range(5):
            (root / f"seg{seg}_{variant_letter(var)}.mp4").write_bytes(b"")
    return root
