"""Tests for the generation CLI."""

from pathlib import Path

import numpy as np

from tileworld.generation.cli import main
from tileworld.generation.persistence import load_map


class TestCli:
    """Tests for the tileworld-generate entry point."""

    def test_generates_map_and_preview(self, tmp_path: Path) -> None:
        """Writes the map and the preview image."""
        output = tmp_path / "out" / "map.npz"
        preview = tmp_path / "out" / "map.png"

        code = main([
            "--width", "16",
            "--height", "14",
            "--seed", "8",
            "--rng-seed", "3",
            "--trees", "5",
            "--output", str(output),
            "--preview", str(preview),
        ])

        assert code == 0
        assert preview.exists()
        variants, mask, trees, metadata = load_map(output)
        assert variants.shape == (14, 16)
        assert metadata["seed"] == 8

    def test_seeded_runs_match(self, tmp_path: Path) -> None:
        """Fixed seeds reproduce the saved grid."""
        args = [
            "--width", "12", "--height", "12",
            "--seed", "2", "--rng-seed", "2", "--trees", "4",
        ]
        main(args + ["--output", str(tmp_path / "a.npz")])
        main(args + ["--output", str(tmp_path / "b.npz")])
        a, _, trees_a, _ = load_map(tmp_path / "a.npz")
        b, _, trees_b, _ = load_map(tmp_path / "b.npz")
        np.testing.assert_array_equal(a, b)
        assert [t.position for t in trees_a] == [t.position for t in trees_b]

    def test_missing_config(self, tmp_path: Path) -> None:
        """Unknown config names exit with status 2."""
        code = main(["--config", "does-not-exist", "--output", str(tmp_path / "x.npz")])
        assert code == 2

    def test_invalid_override(self, tmp_path: Path) -> None:
        """Out-of-range values are rejected."""
        code = main(["--width", "-3", "--trees", "0", "--output", str(tmp_path / "x.npz")])
        assert code == 2

    def test_output_without_suffix(self, tmp_path: Path) -> None:
        """An output path without .npz is saved with the suffix added."""
        code = main([
            "--width", "10", "--height", "10",
            "--seed", "4", "--rng-seed", "4", "--trees", "0",
            "--output", str(tmp_path / "out"),
        ])

        assert code == 0
        variants, _, _, _ = load_map(tmp_path / "out.npz")
        assert variants.shape == (10, 10)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        """Unparseable config files exit with status 2."""
        config = tmp_path / "broken.toml"
        config.write_text("[roads\nwidth = 4\n")
        code = main(["--config", str(config), "--output", str(tmp_path / "x.npz")])
        assert code == 2
        assert not (tmp_path / "x.npz").exists()
