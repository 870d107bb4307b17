"""Conway's B3/S23 rule in scalar and vectorized form."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

BIRTH: frozenset[int] = frozenset({3})
SURVIVE: frozenset[int] = frozenset({2, 3})


def next_state(alive: bool, live_neighbors: int) -> bool:
    """Return whether a cell is alive in the next generation.

    A live cell with 2 or 3 live neighbors survives, a dead cell with
    exactly 3 is born; every other cell is dead.
    """
    if alive:
        return live_neighbors in SURVIVE
    return live_neighbors in BIRTH


def apply_rule(
    cells: NDArray[np.bool_], counts: NDArray[np.integer]
) -> NDArray[np.bool_]:
    """Vectorized next_state over matching cell and count arrays."""
    births = ~cells & (counts == 3)
    survivors = cells & ((counts == 2) | (counts == 3))
    return births | survivors
