"""Boundary policy and Moore-neighborhood helpers.

Every engine walks neighborhoods through this module, so the naive, hash
and parallel strategies agree bit-for-bit on edge cells.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

import numpy as np
from numpy.typing import NDArray

# The 8 Moore-neighborhood offsets as (dx, dy), row-major order
MOORE_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class Topology(str, Enum):
    """How neighbor lookups behave at the grid edges."""

    TOROIDAL = "toroidal"
    """Edges wrap around; lookups never leave the grid."""

    BOUNDED = "bounded"
    """Cells beyond the edges are permanently dead."""

    @classmethod
    def parse(cls, value: "str | Topology") -> "Topology":
        """Return the topology named by value (case-insensitive)."""
        if isinstance(value, Topology):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValueError(
                f"Unknown topology '{value}'. Available: {choices}"
            ) from None


DEFAULT_TOPOLOGY = Topology.TOROIDAL


def neighbor_coords(
    x: int, y: int, width: int, height: int, topology: Topology
) -> Iterator[tuple[int, int]]:
    """Yield the in-grid coordinates of the Moore neighbors of (x, y).

    Toroidal grids always yield 8 coordinates. On grids narrower than three
    cells a coordinate can repeat (or be the cell itself); it is then
    counted once per offset. Bounded grids skip offsets that leave the grid.
    """
    if topology is Topology.TOROIDAL:
        for dx, dy in MOORE_OFFSETS:
            yield (x + dx) % width, (y + dy) % height
        return

    for dx, dy in MOORE_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            yield nx, ny


def pad_cells(cells: NDArray[np.bool_], topology: Topology) -> NDArray[np.uint8]:
    """Surround a (height, width) cell array with a one-cell halo.

    The halo holds the wrapped edge rows/columns for toroidal grids and
    zeros for bounded grids. The result is uint8 so it can be summed.
    """
    mode = "wrap" if topology is Topology.TOROIDAL else "constant"
    padded = np.pad(cells.astype(np.uint8), 1, mode=mode)
    padded.flags.writeable = False
    return padded


def band_neighbor_counts(
    padded: NDArray[np.uint8], start: int, stop: int
) -> NDArray[np.uint8]:
    """Live-neighbor counts for rows [start, stop) of the unpadded grid.

    Reads padded rows start .. stop+1 inclusive, i.e. the band plus its halo.
    """
    height = stop - start
    width = padded.shape[1] - 2
    counts = np.zeros((height, width), dtype=np.uint8)
    for dx, dy in MOORE_OFFSETS:
        counts += padded[
            start + 1 + dy : stop + 1 + dy,
            1 + dx : 1 + dx + width,
        ]
    return counts
