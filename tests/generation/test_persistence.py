"""Tests for saving and loading maps."""

from pathlib import Path

import numpy as np
import pytest

from tileworld.exceptions import MapFormatError
from tileworld.generation.config import GenerationConfig
from tileworld.generation.generator import generate_map
from tileworld.generation.persistence import load_map, save_map


class TestSaveLoad:
    """Tests for the .npz map format."""

    def test_save_then_load(self, tmp_path: Path, small_config: GenerationConfig) -> None:
        """A saved map loads back with the same grids and trees."""
        result = generate_map(small_config)
        path = tmp_path / "map.npz"
        save_map(path, result)

        variants, mask, trees, metadata = load_map(path)

        np.testing.assert_array_equal(variants, result.variants)
        np.testing.assert_array_equal(mask, result.road_mask)
        assert [t.position for t in trees] == result.tree_positions
        assert trees[0].segments[0].color == result.trees[0].segments[0].color
        assert len(trees[0].segments) == len(result.trees[0].segments)

        assert metadata["version"] == 1
        assert metadata["seed"] == 17
        assert metadata["width"] == 12
        assert metadata["height"] == 12
        assert "generated_at" in metadata

    def test_missing_file(self, tmp_path: Path) -> None:
        """Loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_map(tmp_path / "nope.npz")

    def test_missing_array(self, tmp_path: Path) -> None:
        """Files without the variant grid are rejected."""
        path = tmp_path / "bad.npz"
        np.savez_compressed(path, something=np.zeros(3))
        with pytest.raises(MapFormatError):
            load_map(path)

    def test_format_error_is_value_error(self, tmp_path: Path) -> None:
        """Malformed files can be caught as ValueError."""
        path = tmp_path / "bad.npz"
        np.savez_compressed(path, road_mask=np.zeros((2, 2), dtype=bool))
        with pytest.raises(ValueError):
            load_map(path)

    def test_grids_only(self, tmp_path: Path) -> None:
        """Trees and metadata are optional on load."""
        path = tmp_path / "grids.npz"
        np.savez_compressed(
            path,
            variants=np.zeros((3, 4), dtype=np.uint8),
            road_mask=np.zeros((3, 4), dtype=bool),
        )
        variants, mask, trees, metadata = load_map(path)
        assert variants.shape == (3, 4)
        assert trees == []
        assert metadata == {}

    def test_suffix_added_when_missing(
        self, tmp_path: Path, small_config: GenerationConfig
    ) -> None:
        """Paths without .npz gain the suffix, matching what numpy writes."""
        result = generate_map(small_config)

        written = save_map(tmp_path / "map.bin", result)

        assert written == tmp_path / "map.bin.npz"
        assert written.exists()
        assert not (tmp_path / "map.bin").exists()
        variants, _, _, _ = load_map(written)
        np.testing.assert_array_equal(variants, result.variants)

    def test_returns_given_npz_path(
        self, tmp_path: Path, small_config: GenerationConfig
    ) -> None:
        """A path already ending in .npz is written unchanged."""
        path = tmp_path / "map.npz"
        assert save_map(path, generate_map(small_config)) == path
