"""Tests for the command-line interface."""

import numpy as np
import pytest

from fractal_terrain.cli import build_parser, main, resolve_config
from fractal_terrain.persistence import load_heightmap


class TestResolveConfig:
    """Tests for config loading with CLI overrides."""

    def test_defaults_without_config(self):
        """No flags gives the default config."""
        config = resolve_config(build_parser().parse_args([]))
        assert config.generation.size == 257
        assert config.export.normals is True

    def test_overrides(self):
        """Flags override config values."""
        args = build_parser().parse_args(
            [
                "--size", "33",
                "--seed", "5",
                "--roughness", "0.5",
                "--x-scale", "2",
                "--y-scale", "3",
                "--height-scale", "4",
                "--no-normals",
                "--no-texcoords",
                "-o", "mesh.obj",
            ]
        )
        config = resolve_config(args)
        assert config.seed == 5
        assert config.generation.size == 33
        assert config.generation.roughness == 0.5
        assert config.export.x_scale == 2.0
        assert config.export.y_scale == 3.0
        assert config.export.height_scale == 4.0
        assert config.export.normals is False
        assert config.export.texcoords is False
        assert config.output == "mesh.obj"

    def test_named_config_with_override(self):
        """A bundled config is loaded and then overridden."""
        args = build_parser().parse_args(["--config", "default", "--seed", "77"])
        config = resolve_config(args)
        assert config.seed == 77
        assert config.export.x_scale == 4.0


class TestMain:
    """Tests for the main entry point."""

    def test_generates_obj(self, tmp_path):
        """A run writes the OBJ and the optional heightmap."""
        output = tmp_path / "terrain.obj"
        heightmap = tmp_path / "terrain.npz"
        main(
            [
                "--size", "9",
                "--seed", "3",
                "-o", str(output),
                "--save-heightmap", str(heightmap),
            ]
        )
        assert output.exists()
        grid, metadata = load_heightmap(heightmap)
        assert grid.size == 9
        assert metadata["seed"] == 3

    def test_reexport_saved_heightmap(self, tmp_path):
        """--from-heightmap exports without regenerating."""
        heightmap = tmp_path / "terrain.npz"
        main(["--size", "5", "--seed", "3", "-o", str(tmp_path / "a.obj"), "--save-heightmap", str(heightmap)])
        main(["-o", str(tmp_path / "b.obj"), "--from-heightmap", str(heightmap)])

        first = (tmp_path / "a.obj").read_text()
        second = (tmp_path / "b.obj").read_text()
        assert first == second

    def test_invalid_size_exits(self, tmp_path):
        """Invalid sizes exit with status 1."""
        with pytest.raises(SystemExit) as info:
            main(["--size", "10", "-o", str(tmp_path / "x.obj")])
        assert info.value.code == 1
        assert not (tmp_path / "x.obj").exists()

    def test_invalid_scale_exits(self, tmp_path):
        """Config validation failures exit with status 1."""
        with pytest.raises(SystemExit) as info:
            main(["--x-scale", "0", "-o", str(tmp_path / "x.obj")])
        assert info.value.code == 1

    def test_missing_config_exits(self):
        """Unknown config names exit with status 1."""
        with pytest.raises(SystemExit) as info:
            main(["--config", "no-such-config"])
        assert info.value.code == 1

    def test_heights_match_library(self, tmp_path):
        """CLI output matches the library for the same seed."""
        from fractal_terrain.config import GenerationConfig, TerrainConfig
        from fractal_terrain.terrain import generate_heightmap

        heightmap = tmp_path / "terrain.npz"
        main(["--size", "17", "--seed", "8", "-o", str(tmp_path / "t.obj"), "--save-heightmap", str(heightmap)])
        grid, _ = load_heightmap(heightmap)

        expected = generate_heightmap(TerrainConfig(seed=8, generation=GenerationConfig(size=17)))
        np.testing.assert_array_equal(grid.heights, expected.grid.heights)

    def test_malformed_config_exits(self, tmp_path):
        """Malformed TOML exits with status 1."""
        path = tmp_path / "bad.toml"
        path.write_text("[generation\nsize = 9")
        with pytest.raises(SystemExit) as info:
            main(["--config", str(path)])
        assert info.value.code == 1

    def test_unwritable_heightmap_exits(self, tmp_path):
        """A failed heightmap save is logged and exits with status 1."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(SystemExit) as info:
            main(
                [
                    "--size", "5",
                    "-o", str(tmp_path / "t.obj"),
                    "--save-heightmap", str(blocker / "h.npz"),
                ]
            )
        assert info.value.code == 1

    def test_corrupt_heightmap_exits(self, tmp_path):
        """A malformed --from-heightmap archive exits with status 1."""
        path = tmp_path / "corrupt.npz"
        np.savez_compressed(
            path, heights=np.zeros((3, 3), dtype=np.float32), metadata=b"{not json"
        )
        with pytest.raises(SystemExit) as info:
            main(["-o", str(tmp_path / "t.obj"), "--from-heightmap", str(path)])
        assert info.value.code == 1

    def test_save_and_reuse_heightmap_conflict(self):
        """--save-heightmap cannot be combined with --from-heightmap."""
        with pytest.raises(SystemExit) as info:
            build_parser().parse_args(
                ["--from-heightmap", "a.npz", "--save-heightmap", "b.npz"]
            )
        assert info.value.code == 2
