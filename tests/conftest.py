"""Shared test fixtures for terrain tests."""

import itertools

import pytest

from fractal_terrain.config import ExportConfig, GenerationConfig, TerrainConfig
from fractal_terrain.grid import Grid


class ScriptedRandomSource:
    """RandomSource replaying fixed uniform and gaussian sequences.

    Sequences are cycled so any grid size can be generated.
    """

    def __init__(self, uniforms=(0.5,), gaussians=(0.0,)):
        self._uniforms = itertools.cycle(uniforms)
        self._gaussians = itertools.cycle(gaussians)
        self.uniform_calls = 0
        self.gaussian_calls = 0

    def uniform(self) -> float:
        self.uniform_calls += 1
        return next(self._uniforms)

    def gaussian(self) -> float:
        self.gaussian_calls += 1
        return next(self._gaussians)


@pytest.fixture
def make_source():
    """Factory for scripted random sources."""
    return ScriptedRandomSource


@pytest.fixture
def zero_source() -> ScriptedRandomSource:
    """Source with constant corners of 0.5 and no displacement."""
    return ScriptedRandomSource(uniforms=(0.5,), gaussians=(0.0,))


@pytest.fixture
def flat_grid() -> Grid:
    """5x5 grid of zeros, frozen."""
    grid = Grid(5)
    grid.freeze()
    return grid


@pytest.fixture
def ramp_grid() -> Grid:
    """5x5 grid whose height equals the column index."""
    grid = Grid.from_array([[float(col) for col in range(5)] for _ in range(5)])
    grid.freeze()
    return grid


@pytest.fixture
def unit_export() -> ExportConfig:
    """Export config with unit scales and all attributes enabled."""
    return ExportConfig(x_scale=1.0, y_scale=1.0, height_scale=1.0)


@pytest.fixture
def small_config(tmp_path) -> TerrainConfig:
    """Seeded 9x9 config writing into a temporary directory."""
    return TerrainConfig(
        seed=42,
        generation=GenerationConfig(size=9),
        export=ExportConfig(x_scale=1.0, y_scale=1.0),
        output=str(tmp_path / "terrain.obj"),
    )
