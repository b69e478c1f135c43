# main.py
"""Debug entry point: generate one dungeon and print it as ASCII."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, TextIO

import structlog

from dungeon.config import DungeonConfig, load_dungeon_config
from dungeon.exceptions import DungeonError
from dungeon.generator import DungeonGenerator
from dungeon.grid import render_ascii, render_partitions, render_partitions_ascii
from utils.logging_utils import setup_logging

# --- Paths relative to this script's location ---
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_DIR = SCRIPT_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "dungeon.yaml"

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a BSP rooms-and-corridors dungeon and print it."
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for the RNG (default: time-based)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML config file (default: {CONFIG_FILE} if present)",
    )
    parser.add_argument("--width", type=int, default=None, help="Dungeon width in tiles")
    parser.add_argument("--height", type=int, default=None, help="Dungeon height in tiles")
    parser.add_argument(
        "--iterations", type=int, default=None, help="Number of BSP split rounds"
    )
    parser.add_argument(
        "--partitions",
        action="store_true",
        help="Also print the numbered partition map",
    )
    parser.add_argument(
        "--leaves",
        action="store_true",
        help="Print the leaf regions after every split round",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> DungeonConfig:
    if args.config is not None:
        config = load_dungeon_config(args.config)
    elif CONFIG_FILE.is_file():
        config = load_dungeon_config(CONFIG_FILE)
    else:
        config = DungeonConfig()
    return config.with_overrides(
        width=args.width, height=args.height, split_iterations=args.iterations
    )


def print_leaves(generator: DungeonGenerator, out: TextIO) -> None:
    for depth in range(generator.tree.rounds + 1):
        out.write(f"========= Leaf nodes after {depth} split round(s) =========\n")
        for node in generator.tree.nodes_at_depth(depth):
            area = node.area
            out.write(f"x = {area.x} y = {area.y} w = {area.w} h = {area.h}\n")


def main(argv: Optional[Sequence[str]] = None, out: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or sys.stdout
    log_level = (
        logging.DEBUG
        if args.verbose
        else getattr(logging, args.log_level.upper(), logging.WARNING)
    )
    setup_logging(log_level)

    seed = args.seed if args.seed is not None else int(time.time() * 1000)
    try:
        config = resolve_config(args)
        generator = DungeonGenerator(config=config, seed=seed)
        grid = generator.generate_map()
    except (DungeonError, FileNotFoundError) as e:
        log.error("Dungeon generation failed", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.leaves:
        print_leaves(generator, out)
    if args.partitions:
        out.write("Partitions:\n")
        render_partitions_ascii(
            render_partitions(generator.tree.leaf_areas(), config.width, config.height),
            out,
        )
        out.write("\n")
    out.write(f"Seed: {seed}\n")
    render_ascii(grid, out)
    if generator.unreachable_rooms:
        out.write(f"Unreachable rooms: {len(generator.unreachable_rooms)}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
