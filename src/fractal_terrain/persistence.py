"""Heightmap persistence: save and load raw generated grids."""

import json
import zipfile
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import structlog

from .config import TerrainConfig
from .exceptions import ExportError, HeightmapLoadError
from .grid import Grid

logger = structlog.get_logger()

FORMAT_VERSION = 1


def save_heightmap(path: Path, grid: Grid, config: TerrainConfig) -> None:
    """Save a generated heightmap to disk.

    Uses numpy's compressed .npz format for efficient storage.

    Args:
        path: Output path (should end with .npz).
        grid: Generated grid.
        config: Configuration the grid was generated with.

    Raises:
        ExportError: If the directory or file cannot be written.
    """
    metadata = {
        "version": FORMAT_VERSION,
        "size": grid.size,
        "seed": config.seed,
        "roughness": config.generation.roughness,
        "initial_scale": config.generation.initial_scale,
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "wb") as f:
            np.savez_compressed(
                f,
                heights=grid.heights,
                metadata=json.dumps(metadata).encode("utf-8"),
            )
    except OSError as e:
        raise ExportError(f"Failed to save heightmap to {path}: {e}") from e

    logger.info("heightmap_saved", path=str(path), size=grid.size)


def load_heightmap(path: Path) -> tuple[Grid, dict]:
    """Load a heightmap from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (frozen Grid, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        HeightmapLoadError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Heightmap file not found: {path}")

    try:
        data = np.load(path)
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise HeightmapLoadError(f"Cannot read heightmap archive {path}: {e}") from e

    if not isinstance(data, np.lib.npyio.NpzFile):
        raise HeightmapLoadError(f"Invalid heightmap file: {path} is not an .npz archive")

    with data:
        if "heights" not in data:
            raise HeightmapLoadError("Invalid heightmap file: missing 'heights' array")
        try:
            # Every decoding failure below surfaces as a ValueError
            grid = Grid.from_array(data["heights"])
            if "metadata" in data:
                metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
            else:
                metadata = {}
        except ValueError as e:
            raise HeightmapLoadError(f"Invalid heightmap file {path}: {e}") from e

    grid.freeze()
    logger.info("heightmap_loaded", path=str(path), size=grid.size)
    return grid, metadata
