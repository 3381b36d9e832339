"""Diamond-square terrain synthesis with Wavefront OBJ export.

Example:
    >>> from fractal_terrain import TerrainConfig, generate_and_export
    >>> config = TerrainConfig(seed=7)
    >>> result = generate_and_export(config, "terrain.obj")
"""

from .config import ExportConfig, GenerationConfig, TerrainConfig, load_config
from .exceptions import (
    ExportError,
    FrozenGridError,
    HeightmapLoadError,
    IndexOutOfBoundsError,
    InvalidSizeError,
    TerrainError,
)
from .exporter import MeshExporter
from .generator import DiamondSquareGenerator, gather_neighbors, scale_schedule
from .grid import Grid, is_valid_size
from .normals import NormalEstimator
from .persistence import load_heightmap, save_heightmap
from .random_source import NumpyRandomSource, RandomSource
from .terrain import (
    GenerationResult,
    export_mesh,
    generate_and_export,
    generate_heightmap,
)

__version__ = "0.1.0"

__all__ = [
    "DiamondSquareGenerator",
    "ExportConfig",
    "ExportError",
    "FrozenGridError",
    "GenerationConfig",
    "GenerationResult",
    "Grid",
    "HeightmapLoadError",
    "IndexOutOfBoundsError",
    "InvalidSizeError",
    "MeshExporter",
    "NormalEstimator",
    "NumpyRandomSource",
    "RandomSource",
    "TerrainConfig",
    "TerrainError",
    "export_mesh",
    "gather_neighbors",
    "generate_and_export",
    "generate_heightmap",
    "is_valid_size",
    "load_config",
    "load_heightmap",
    "save_heightmap",
    "scale_schedule",
]
