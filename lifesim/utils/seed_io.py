"""Seed loading and final-state writing.

Seed files are rows of '.' (dead) and 'O' (live) characters. A seed may
also be the output of a previous run, whose first line is the header
``<width> <height> <iterations>``; resuming from it carries the iteration
count forward so the next output file records the cumulative total.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from lifesim.core.exceptions import MalformedSeedError
from lifesim.core.grid import Grid
from lifesim.core.topology import DEFAULT_TOPOLOGY, Topology

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_FILENAME = "game_of_life_{width}_{height}_{iterations}.txt"


@dataclass(frozen=True)
class Seed:
    """A parsed seed: the starting grid and the iterations already run."""

    grid: Grid
    iterations: int = 0


def _parse_header(line: str) -> tuple[int, int, int] | None:
    parts = line.split()
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        return None
    width, height, iterations = (int(part) for part in parts)
    return width, height, iterations


def parse_seed(
    lines: list[str],
    width: int,
    height: int,
    topology: Topology = DEFAULT_TOPOLOGY,
) -> Seed:
    """Parse seed text already split into lines.

    Raises:
        MalformedSeedError: on a header that disagrees with width/height,
            or on any grid-shape or character error
    """
    # Trailing blank lines are tolerated; blank lines inside the grid are not
    while lines and not lines[-1].strip():
        lines = lines[:-1]
    if not lines:
        raise MalformedSeedError("Seed contains no rows")

    iterations = 0
    offset = 0
    header = _parse_header(lines[0])
    if header is not None:
        header_width, header_height, iterations = header
        if (header_width, header_height) != (width, height):
            raise MalformedSeedError(
                f"Seed header describes a {header_width}x{header_height} grid, "
                f"expected {width}x{height}",
                line=1,
            )
        lines = lines[1:]
        offset = 1

    try:
        grid = Grid.from_text(lines, width=width, height=height, topology=topology)
    except MalformedSeedError as exc:
        if exc.line is None or not offset:
            raise
        # Report the line number within the file, not within the grid block
        raise MalformedSeedError(exc.reason, line=exc.line + offset) from exc

    return Seed(grid=grid, iterations=iterations)


def read_seed(
    path: PathLike,
    width: int,
    height: int,
    topology: Topology = DEFAULT_TOPOLOGY,
) -> Seed:
    """Load a seed file that must describe exactly width x height cells.

    Raises:
        MalformedSeedError: if the file cannot be read or is malformed
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MalformedSeedError(
            f"Failed to read seed file {p}: {exc}", details={"path": str(p)}
        ) from exc

    seed = parse_seed(text.splitlines(), width, height, topology)
    logger.info(
        f"Loaded {width}x{height} seed from {p} "
        f"({seed.grid.population} live cells, {seed.iterations} prior iterations)"
    )
    return seed


def format_state(grid: Grid, iterations: int) -> str:
    """Render the output file body: header line then one row per line."""
    lines = [f"{grid.width} {grid.height} {iterations}", *grid.to_text()]
    return "\n".join(lines) + "\n"


def output_filename(
    width: int, height: int, iterations: int, template: str = DEFAULT_FILENAME
) -> str:
    """File name encoding the grid size and total iteration count."""
    return template.format(width=width, height=height, iterations=iterations)


def write_state(path: PathLike, grid: Grid, iterations: int) -> Path:
    """Write the final state atomically and return the written path.

    The content goes to a temporary file in the target directory first and
    is renamed into place, so a failed write never leaves a partial file.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=str(target.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(format_state(grid, iterations))
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(f"Wrote {grid.width}x{grid.height} state after {iterations} iterations to {target}")
    return target
