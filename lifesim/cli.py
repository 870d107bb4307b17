"""Command-line entry point.

Usage:
    lifesim <width> <height> <iterations> <implementation> [seed_file]

Omitting seed_file starts from a random grid. The final state is written
to a file named after the grid size and the total iteration count.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from lifesim.core.engine_registry import create_engine, list_available_engines
from lifesim.core.exceptions import LifeSimError
from lifesim.core.grid import Grid
from lifesim.core.progress import LoggingProgress
from lifesim.core.simulator import Simulator
from lifesim.core.topology import Topology
from lifesim.engines import ParallelEngine
from lifesim.utils.config_loader import LifeSimConfig, get_config, load_config
from lifesim.utils.seed_io import output_filename, read_seed, write_state

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return number


def _density(value: str) -> float:
    number = float(value)
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"must be within [0, 1], got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lifesim",
        description="Run Conway's Game of Life and write the final state.",
    )
    parser.add_argument("width", type=_positive_int, help="Grid width in cells")
    parser.add_argument("height", type=_positive_int, help="Grid height in cells")
    parser.add_argument(
        "iterations", type=_non_negative_int, help="Number of generations to run"
    )
    parser.add_argument(
        "implementation",
        choices=list_available_engines(),
        help="Update engine to use",
    )
    parser.add_argument(
        "seed_file",
        nargs="?",
        default=None,
        help="Seed file of '.'/'O' rows (random grid if omitted)",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument(
        "--topology",
        choices=[t.value for t in Topology],
        default=None,
        help="Boundary policy (overrides the config)",
    )
    parser.add_argument(
        "--workers", type=_positive_int, default=None, help="Parallel worker threads"
    )
    parser.add_argument(
        "--chunks", type=_positive_int, default=None, help="Parallel row bands per step"
    )
    parser.add_argument(
        "--density", type=_density, default=None, help="Live probability for random grids"
    )
    parser.add_argument(
        "--seed", type=_non_negative_int, default=None, help="RNG seed for random grids"
    )
    parser.add_argument(
        "--output-dir", default=None, help="Directory for the final state file"
    )
    parser.add_argument(
        "--progress", action="store_true", help="Log progress during the run"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides the config)",
    )
    return parser


def _initial_grid(
    args: argparse.Namespace, config: LifeSimConfig, topology: Topology
) -> tuple[Grid, int]:
    if args.seed_file is not None:
        seed = read_seed(args.seed_file, args.width, args.height, topology)
        return seed.grid, seed.iterations

    density = args.density if args.density is not None else config.random.density
    rng_seed = args.seed if args.seed is not None else config.random.seed
    grid = Grid.random(
        args.width, args.height, density=density, seed=rng_seed, topology=topology
    )
    logger.info(
        f"Generated random {args.width}x{args.height} grid "
        f"(density={density}, population={grid.population})"
    )
    return grid, 0


def _engine_kwargs(args: argparse.Namespace, config: LifeSimConfig) -> dict:
    if args.implementation != ParallelEngine.name:
        return {}
    return {
        "workers": args.workers if args.workers is not None else config.parallel.workers,
        "chunks": args.chunks if args.chunks is not None else config.parallel.chunks,
    }


def resolve_config(args: argparse.Namespace) -> LifeSimConfig:
    """Load --config if given, otherwise the bundled defaults."""
    return load_config(args.config) if args.config else get_config()


def run(args: argparse.Namespace, config: LifeSimConfig) -> Path:
    """Execute a parsed command line and return the written file path.

    Raises:
        LifeSimError: on seed or compute failures. Nothing is written in
            that case.
        OSError: if the output directory or file cannot be written
    """
    topology = Topology.parse(args.topology) if args.topology else config.topology

    grid, prior_iterations = _initial_grid(args, config, topology)

    simulator = Simulator()
    if args.progress:
        simulator.subscribe(LoggingProgress(config.logging.progress_every))

    with create_engine(args.implementation, **_engine_kwargs(args, config)) as engine:
        logger.info(f"Using {engine!r} on a {topology.value} grid")
        final_grid = simulator.run(grid, args.iterations, engine)

    total_iterations = prior_iterations + args.iterations
    output_dir = Path(args.output_dir or config.output.directory)
    name = output_filename(
        args.width, args.height, total_iterations, config.output.filename
    )
    return write_state(output_dir / name, final_grid, total_iterations)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    log_format = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    try:
        config = resolve_config(args)
    except LifeSimError as exc:
        logging.basicConfig(level=args.log_level or "INFO", format=log_format)
        logger.error(f"{type(exc).__name__}: {exc}")
        return EXIT_FAILURE

    logging.basicConfig(level=args.log_level or config.logging.level, format=log_format)

    try:
        path = run(args, config)
    except LifeSimError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return EXIT_FAILURE
    except OSError as exc:
        logger.error(f"Failed to write the final state: {exc}")
        return EXIT_FAILURE

    print(path)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
