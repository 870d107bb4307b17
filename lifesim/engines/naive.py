"""Dense full-scan engine.

Visits every cell of the grid once per generation and counts its neighbors
by walking the topology's Moore neighborhood. O(width x height) per step
regardless of how many cells are alive; this is the reference the other
engines are checked against.
"""

from __future__ import annotations

from lifesim.core.engine_registry import register_engine
from lifesim.core.grid import Grid
from lifesim.core.rules import next_state
from lifesim.core.topology import neighbor_coords
from lifesim.interfaces.engine import Engine


@register_engine
class NaiveEngine(Engine):
    """Single-threaded per-cell update over a flat copy of the cells."""

    name = "naive"

    def step(self, state: Grid) -> Grid:
        width, height, topology = state.width, state.height, state.topology
        cells = state.cells.tolist()
        next_cells = [False] * (width * height)

        for y in range(height):
            row = y * width
            for x in range(width):
                live_neighbors = 0
                for nx, ny in neighbor_coords(x, y, width, height, topology):
                    live_neighbors += cells[ny * width + nx]
                next_cells[row + x] = next_state(cells[row + x], live_neighbors)

        return Grid.from_cells(next_cells, width, height, topology)
