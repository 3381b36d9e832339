"""Terrain generation and export orchestration."""

from pathlib import Path
from typing import TextIO

import structlog

from .config import TerrainConfig
from .exporter import MeshExporter
from .generator import DiamondSquareGenerator
from .grid import Grid
from .persistence import save_heightmap
from .random_source import NumpyRandomSource, RandomSource

logger = structlog.get_logger()


class GenerationResult:
    """Result of heightmap generation."""

    def __init__(self, grid: Grid, config: TerrainConfig, scales: list[float]):
        self.grid = grid
        self.config = config
        self.scales = scales


def generate_heightmap(
    config: TerrainConfig, source: RandomSource | None = None
) -> GenerationResult:
    """Generate a heightmap from configuration.

    Args:
        config: Terrain configuration.
        source: Random source. Defaults to a numpy source seeded with
            config.seed.

    Returns:
        GenerationResult with the frozen grid and the scales used.
    """
    if source is None:
        source = NumpyRandomSource(config.seed)

    size = config.generation.size
    logger.info("generating_heightmap", size=size, seed=config.seed)

    generator = DiamondSquareGenerator(config.generation, source)
    grid = generator.generate()
    return GenerationResult(grid=grid, config=config, scales=generator.scales)


def export_mesh(grid: Grid, config: TerrainConfig, sink: str | Path | TextIO) -> int:
    """Export a grid as an OBJ mesh.

    Returns:
        Number of records written.
    """
    return MeshExporter(grid, config.export).write(sink)


def generate_and_export(
    config: TerrainConfig,
    sink: str | Path | TextIO | None = None,
    source: RandomSource | None = None,
) -> GenerationResult:
    """Generate a heightmap and export it, saving the raw grid if configured.

    Args:
        config: Terrain configuration.
        sink: OBJ destination. Defaults to config.output.
        source: Random source, see generate_heightmap.

    Returns:
        GenerationResult of the run.
    """
    result = generate_heightmap(config, source)

    if config.heightmap_output:
        save_heightmap(Path(config.heightmap_output), result.grid, config)

    export_mesh(result.grid, config, sink if sink is not None else config.output)
    return result
