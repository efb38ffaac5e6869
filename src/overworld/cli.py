"""Command-line interface for overworld generation."""

import argparse
import logging
import time
import tomllib
from pathlib import Path

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog console output (INFO, or DEBUG when verbose)."""
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
    """CLI entry point for overworld generation."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural overworld and its tileset"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a TOML config file",
    )
    parser.add_argument("--width", type=int, default=None, help="Map width in tiles")
    parser.add_argument("--height", type=int, default=None, help="Map height in tiles")
    parser.add_argument("--seed", type=int, default=None, help="Master seed")
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="out",
        help="Output directory (default: out)",
    )
    parser.add_argument(
        "--no-map",
        action="store_true",
        help="Skip the full-resolution map composite",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from pydantic import ValidationError

    from .config import OverworldConfig, find_config, load_config
    from .exceptions import SessionNotInitializedError
    from .export import (
        compute_terrain_stats,
        format_stats,
        render_map,
        render_minimap,
        save_tileset,
    )
    from .session import OverworldSession
    from .terrain.config import MapConfig

    if args.config:
        try:
            config_path = find_config(args.config)
        except FileNotFoundError as e:
            logger.error("config_not_found", path=args.config, error=str(e))
            raise SystemExit(1)
        try:
            config = load_config(config_path)
        except (ValidationError, tomllib.TOMLDecodeError) as e:
            logger.error("config_invalid", path=str(config_path), error=str(e))
            raise SystemExit(1)
        logger.info("config_loaded", path=str(config_path))
    else:
        config = OverworldConfig()

    # Apply CLI overrides through validation
    overrides = {
        key: value
        for key, value in (
            ("width", args.width),
            ("height", args.height),
            ("seed", args.seed),
        )
        if value is not None
    }
    if overrides:
        try:
            config.map = MapConfig.model_validate(
                {**config.map.model_dump(), **overrides}
            )
        except ValidationError as e:
            logger.error("invalid_arguments", overrides=overrides, error=str(e))
            raise SystemExit(1)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    start_time = time.time()
    session = OverworldSession(config)
    session.initialize()
    logger.info("generation_complete", seconds=round(time.time() - start_time, 2))

    if session.grid is None or session.atlas is None:
        raise SessionNotInitializedError("Session produced no grid or atlas")
    print(format_stats(compute_terrain_stats(session.grid), seed=session.seed))

    tile_size = config.textures.tile_size
    save_tileset(session.atlas, output_dir, tile_size)

    minimap_path = output_dir / "minimap.png"
    render_minimap(session.grid).save(minimap_path)
    logger.info("minimap_saved", path=str(minimap_path))

    if not args.no_map:
        map_path = output_dir / "map.png"
        render_map(session.grid, session.descriptors, session.atlas, tile_size).save(map_path)
        logger.info("map_saved", path=str(map_path))


if __name__ == "__main__":
    main()
