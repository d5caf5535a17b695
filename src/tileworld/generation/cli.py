"""Command-line interface for map generation."""

import argparse
import logging
import sys
import time
import tomllib
from pathlib import Path

import structlog


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for map generation."""
    parser = argparse.ArgumentParser(
        description="Generate a road network and fractal trees for a tile world"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path or name of a TOML config (default: built-in defaults)",
    )
    parser.add_argument("--width", type=int, default=None, help="Grid width")
    parser.add_argument("--height", type=int, default=None, help="Grid height")
    parser.add_argument(
        "--seed", type=int, default=None, help="Noise seed (default: random)"
    )
    parser.add_argument(
        "--rng-seed",
        type=int,
        default=None,
        help="Seed for tree placement and branching (default: random)",
    )
    parser.add_argument(
        "--trees", type=int, default=None, help="Number of trees to place"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="saves/map.npz",
        help="Output path (default: saves/map.npz)",
    )
    parser.add_argument(
        "--preview",
        type=str,
        default=None,
        help="Write a PNG preview to this path (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
    logger = structlog.get_logger()

    # Import here to avoid slow startup for --help
    from pydantic import ValidationError

    from ..config import find_config, load_config
    from ..exceptions import TileWorldError
    from .config import GenerationConfig
    from .generator import generate_map
    from .persistence import save_map
    from .render import render_preview
    from .validation import validate_map

    try:
        config = (
            load_config(find_config(args.config)) if args.config else GenerationConfig()
        )
        data = config.model_dump()
        if args.seed is not None:
            data["seed"] = args.seed
        if args.rng_seed is not None:
            data["rng_seed"] = args.rng_seed
        if args.width is not None:
            data["roads"]["width"] = args.width
        if args.height is not None:
            data["roads"]["height"] = args.height
        if args.trees is not None:
            data["placement"]["tree_count"] = args.trees
        config = GenerationConfig.model_validate(data)
    except (FileNotFoundError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.error("config_error", error=str(e))
        return 2

    start_time = time.time()
    try:
        result = generate_map(config)
    except TileWorldError as e:
        logger.error("generation_failed", error=str(e))
        return 1
    gen_time = time.time() - start_time

    validation = validate_map(result)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path = save_map(output_path, result)

    if args.preview:
        render_preview(result, Path(args.preview))

    logger.info(
        "done",
        seconds=round(gen_time, 2),
        seed=result.seed,
        output=str(output_path),
        valid=validation.passed,
    )
    return 0 if validation.passed else 1


if __name__ == "__main__":
    sys.exit(main())
