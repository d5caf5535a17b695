"""Shared test fixtures for tileworld tests."""

import numpy as np
import pytest

from tileworld.generation.config import (
    GenerationConfig,
    PlacementConfig,
    RoadConfig,
    TreeConfig,
)


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source."""
    return np.random.default_rng(1234)


@pytest.fixture
def small_config() -> GenerationConfig:
    """12x12 map with a fixed seed and a handful of shallow trees."""
    return GenerationConfig(
        seed=17,
        rng_seed=99,
        roads=RoadConfig(width=12, height=12, noise_scale=0.4),
        trees=TreeConfig(max_depth=3),
        placement=PlacementConfig(tree_count=6, min_tree_distance=1.5),
    )


def mask_from_rows(rows: list[str]) -> np.ndarray:
    """Build a road mask from text rows, top row = highest y.

    '#' is road, anything else is not.
    """
    height = len(rows)
    width = len(rows[0])
    mask = np.zeros((height, width), dtype=bool)
    for row_index, row in enumerate(rows):
        y = height - 1 - row_index
        for x, ch in enumerate(row):
            mask[y, x] = ch == "#"
    return mask


@pytest.fixture
def make_mask():
    """Factory building road masks from text rows (see mask_from_rows)."""
    return mask_from_rows
