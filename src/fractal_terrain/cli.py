"""Command-line interface for heightmap generation and OBJ export."""

import argparse
import logging
import time
import tomllib
from pathlib import Path

import structlog
from pydantic import ValidationError

from .config import TerrainConfig, find_config, load_config
from .exceptions import TerrainError
from .persistence import load_heightmap
from .terrain import export_mesh, generate_and_export


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate a diamond-square heightmap and export it as an OBJ mesh"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path or name of a TOML config file"
    )
    parser.add_argument(
        "--size", type=int, default=None, help="Cells per side, 2^n + 1 (default: 257)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--roughness", type=float, default=None, help="Displacement decay exponent"
    )
    parser.add_argument("--x-scale", type=float, default=None, help="Mesh stretch along x")
    parser.add_argument("--y-scale", type=float, default=None, help="Mesh stretch along y")
    parser.add_argument(
        "--height-scale", type=float, default=None, help="Mesh stretch of heights"
    )
    parser.add_argument(
        "--no-normals", action="store_true", help="Do not emit vertex normals"
    )
    parser.add_argument(
        "--no-texcoords", action="store_true", help="Do not emit texture coordinates"
    )
    parser.add_argument(
        "--output", "-o", type=str, default=None, help="OBJ output path"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--save-heightmap",
        type=str,
        default=None,
        help="Also save the raw heightmap to this .npz path",
    )
    source.add_argument(
        "--from-heightmap",
        type=str,
        default=None,
        help="Export a previously saved .npz heightmap instead of generating",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> TerrainConfig:
    """Load the configured TOML file, then apply CLI overrides."""
    config = load_config(find_config(args.config)) if args.config else TerrainConfig()

    if args.seed is not None:
        config.seed = args.seed
    if args.size is not None:
        config.generation.size = args.size
    if args.roughness is not None:
        config.generation.roughness = args.roughness
    if args.x_scale is not None:
        config.export.x_scale = args.x_scale
    if args.y_scale is not None:
        config.export.y_scale = args.y_scale
    if args.height_scale is not None:
        config.export.height_scale = args.height_scale
    if args.no_normals:
        config.export.normals = False
    if args.no_texcoords:
        config.export.texcoords = False
    if args.output is not None:
        config.output = args.output
    if args.save_heightmap is not None:
        config.heightmap_output = args.save_heightmap

    # Re-validate after overrides
    return TerrainConfig.model_validate(config.model_dump())


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for terrain generation."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    try:
        config = resolve_config(args)
    except FileNotFoundError as e:
        logger.error("config_not_found", error=str(e))
        raise SystemExit(1)
    except (ValidationError, tomllib.TOMLDecodeError) as e:
        logger.error("config_invalid", error=str(e))
        raise SystemExit(1)

    start_time = time.time()
    try:
        if args.from_heightmap:
            grid, metadata = load_heightmap(Path(args.from_heightmap))
            logger.info("heightmap_reused", path=args.from_heightmap, seed=metadata.get("seed"))
            export_mesh(grid, config, config.output)
        else:
            generate_and_export(config)
    except (TerrainError, FileNotFoundError) as e:
        logger.error("terrain_failed", error=str(e))
        raise SystemExit(1)

    logger.info(
        "terrain_complete",
        output=config.output,
        elapsed_s=round(time.time() - start_time, 2),
    )


if __name__ == "__main__":
    main()
