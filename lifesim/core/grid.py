"""Immutable cell grid shared by every engine.

A Grid is a width x height matrix of booleans stored row-major, so the flat
index of (x, y) is ``y * width + x``. The backing numpy array is flagged
read-only: engines read generation t from one Grid and produce generation
t+1 as a new Grid, never mutating the input.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from lifesim.core.exceptions import MalformedSeedError, OutOfBoundsError
from lifesim.core.topology import DEFAULT_TOPOLOGY, Topology, neighbor_coords

LIVE_CHAR = "O"
DEAD_CHAR = "."


class Grid:
    """Fixed-size boolean cell matrix with a boundary policy."""

    __slots__ = ("_cells", "_topology", "_hash")

    def __init__(
        self,
        cells: NDArray[np.bool_],
        topology: Topology = DEFAULT_TOPOLOGY,
        copy: bool = True,
    ):
        """Create a grid from a (height, width) array.

        Args:
            cells: 2D array indexed [y, x]; any dtype, truthiness is used
            topology: Boundary policy honored by every engine
            copy: Copy the array before freezing it. Engines that hand over
                a freshly allocated buffer pass False.
        """
        array = np.asarray(cells)
        if array.ndim != 2:
            raise ValueError(f"Grid cells must be 2D, got {array.ndim}D")
        height, width = array.shape
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        if copy or array.dtype != np.bool_:
            array = array.astype(np.bool_, copy=True)
        array.flags.writeable = False

        self._cells = array
        self._topology = Topology.parse(topology)
        self._hash: Optional[int] = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def empty(
        cls, width: int, height: int, topology: Topology = DEFAULT_TOPOLOGY
    ) -> "Grid":
        """Return an all-dead grid."""
        _check_dimensions(width, height)
        return cls(np.zeros((height, width), dtype=np.bool_), topology, copy=False)

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[bool],
        width: int,
        height: int,
        topology: Topology = DEFAULT_TOPOLOGY,
    ) -> "Grid":
        """Build a grid from a flat row-major sequence of cell states."""
        _check_dimensions(width, height)
        # np.array copies; the grid never aliases the caller's buffer
        flat = np.array(cells, dtype=np.bool_)
        if flat.size != width * height:
            raise ValueError(
                f"Expected {width * height} cells for a {width}x{height} grid, "
                f"got {flat.size}"
            )
        return cls(flat.reshape(height, width), topology, copy=False)

    @classmethod
    def from_live_cells(
        cls,
        live: Iterable[tuple[int, int]],
        width: int,
        height: int,
        topology: Topology = DEFAULT_TOPOLOGY,
    ) -> "Grid":
        """Build a grid whose live cells are exactly the given (x, y) coordinates."""
        _check_dimensions(width, height)
        cells = np.zeros((height, width), dtype=np.bool_)
        for x, y in live:
            if not (0 <= x < width and 0 <= y < height):
                raise OutOfBoundsError(x, y, width, height)
            cells[y, x] = True
        return cls(cells, topology, copy=False)

    @classmethod
    def random(
        cls,
        width: int,
        height: int,
        density: float = 0.5,
        seed: Optional[int] = None,
        topology: Topology = DEFAULT_TOPOLOGY,
    ) -> "Grid":
        """Return a grid where each cell is live with probability density."""
        _check_dimensions(width, height)
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"density must be within [0, 1], got {density}")
        if seed is not None and seed < 0:
            raise ValueError(f"seed must be >= 0, got {seed}")
        rng = np.random.default_rng(seed)
        cells = rng.random((height, width)) < density
        return cls(cells, topology, copy=False)

    @classmethod
    def from_text(
        cls,
        rows: Iterable[str],
        width: Optional[int] = None,
        height: Optional[int] = None,
        topology: Topology = DEFAULT_TOPOLOGY,
    ) -> "Grid":
        """Parse rows of '.' (dead) and 'O' (live) characters.

        Args:
            rows: One string per grid row; trailing newlines are ignored
            width: Required width, if the caller knows it
            height: Required height, if the caller knows it
            topology: Boundary policy of the resulting grid

        Raises:
            MalformedSeedError: if the block is empty or not rectangular,
                contains other characters, or its dimensions differ from
                the requested width/height
        """
        parsed: list[list[bool]] = []
        for line_no, raw in enumerate(rows, start=1):
            row = raw.rstrip("\r\n")
            if not row:
                raise MalformedSeedError("Empty row in seed", line=line_no)
            if parsed and len(row) != len(parsed[0]):
                raise MalformedSeedError(
                    f"Row length {len(row)} differs from first row length "
                    f"{len(parsed[0])}",
                    line=line_no,
                )
            bad = set(row) - {LIVE_CHAR, DEAD_CHAR}
            if bad:
                raise MalformedSeedError(
                    f"Unrecognized characters {sorted(bad)!r} in seed",
                    line=line_no,
                )
            parsed.append([ch == LIVE_CHAR for ch in row])

        if not parsed:
            raise MalformedSeedError("Seed contains no rows")

        parsed_height, parsed_width = len(parsed), len(parsed[0])
        if (width is not None and parsed_width != width) or (
            height is not None and parsed_height != height
        ):
            raise MalformedSeedError(
                f"Seed is {parsed_width}x{parsed_height}, expected "
                f"{width if width is not None else parsed_width}x"
                f"{height if height is not None else parsed_height}",
                details={"width": parsed_width, "height": parsed_height},
            )

        return cls(np.array(parsed, dtype=np.bool_), topology, copy=False)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._cells.shape[1]

    @property
    def height(self) -> int:
        return self._cells.shape[0]

    @property
    def topology(self) -> Topology:
        return self._topology

    @property
    def cells(self) -> NDArray[np.bool_]:
        """Flat row-major read-only view of the cell states."""
        return self._cells.reshape(-1)

    @property
    def population(self) -> int:
        """Number of live cells."""
        return int(np.count_nonzero(self._cells))

    def as_array(self) -> NDArray[np.bool_]:
        """Read-only (height, width) view indexed [y, x]."""
        return self._cells

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------

    def index(self, x: int, y: int) -> int:
        """Flat row-major index of (x, y)."""
        self._check_bounds(x, y)
        return y * self.width + x

    def get(self, x: int, y: int) -> bool:
        """State of the cell at (x, y).

        Raises:
            OutOfBoundsError: if (x, y) lies outside the grid
        """
        self._check_bounds(x, y)
        return bool(self._cells[y, x])

    def neighbor_count(self, x: int, y: int) -> int:
        """Live cells among the 8 Moore neighbors of (x, y) under the topology."""
        self._check_bounds(x, y)
        return sum(
            1
            for nx, ny in neighbor_coords(x, y, self.width, self.height, self._topology)
            if self._cells[ny, nx]
        )

    def live_cells(self) -> set[tuple[int, int]]:
        """Coordinates (x, y) of every live cell."""
        ys, xs = np.nonzero(self._cells)
        return set(zip(xs.tolist(), ys.tolist()))

    def with_topology(self, topology: Topology) -> "Grid":
        """Same cells under a different boundary policy."""
        return Grid(self._cells, topology, copy=False)

    # ------------------------------------------------------------------
    # Text form
    # ------------------------------------------------------------------

    def to_text(self) -> list[str]:
        """Rows of '.'/'O' characters; the inverse of from_text."""
        return [
            "".join(LIVE_CHAR if cell else DEAD_CHAR for cell in row)
            for row in self._cells.tolist()
        ]

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self._topology is other._topology
            and self._cells.shape == other._cells.shape
            and bool(np.array_equal(self._cells, other._cells))
        )

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(
                (self._cells.shape, self._topology, self._cells.tobytes())
            )
        return self._hash

    def __repr__(self) -> str:
        return (
            f"Grid(width={self.width}, height={self.height}, "
            f"topology={self._topology.value}, population={self.population})"
        )


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
