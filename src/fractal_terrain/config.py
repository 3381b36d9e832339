"""Terrain configuration models loaded from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class GenerationConfig(BaseModel):
    """Diamond-square generation parameters."""

    size: int = Field(default=257, description="Cells per side, must be 2^n + 1")
    roughness: float = Field(
        default=1.0,
        description="Displacement scale is divided by 2^roughness per iteration",
    )
    initial_scale: float = Field(
        default=1.0, ge=0.0, description="Displacement std at the first iteration"
    )
    corner_height: float = Field(
        default=1.0, description="Multiplier on the uniform corner draws"
    )
    displacement_mean: float = Field(
        default=0.0, description="Mean added to every random displacement"
    )


class ExportConfig(BaseModel):
    """Mesh export parameters."""

    x_scale: float = Field(default=4.0, gt=0.0, description="Horizontal stretch along x")
    y_scale: float = Field(default=4.0, gt=0.0, description="Horizontal stretch along y")
    height_scale: float = Field(default=1.0, description="Vertical stretch of heights")
    normals: bool = Field(default=True, description="Emit vn records")
    texcoords: bool = Field(default=True, description="Emit vt records")
    precision: int = Field(
        default=6, ge=1, le=17, description="Decimal places of emitted floats"
    )


class TerrainConfig(BaseModel):
    """Complete configuration for one generation and export run."""

    seed: int | None = Field(
        default=None, description="Random seed (None = nondeterministic)"
    )
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    output: str = Field(default="terrain.obj", description="OBJ output path")
    heightmap_output: str | None = Field(
        default=None, description="Optional .npz path for the raw heightmap"
    )


def load_config(config_path: Path) -> TerrainConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed TerrainConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return TerrainConfig.model_validate(data)


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def _configs_dir() -> Path:
    # src/fractal_terrain/config.py -> project root
    return Path(__file__).parent.parent.parent / "configs"
