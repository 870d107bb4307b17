"""Engine abstraction - behavioral contract.

An Engine computes generation t+1 from generation t. Engines may keep their
own native state between steps (the hash engine works on a LiveSet rather
than a Grid); prepare() and finish() convert at the boundaries of a run.

CONTRACT:
- step() never mutates its input and returns a new state value
- step() is deterministic: equal inputs give equal outputs
- Every engine applies the same rule and boundary policy, so
  finish(step(prepare(grid))) is identical across engines
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from lifesim.core.grid import Grid


class Engine(ABC):
    """Base class for generation-update strategies."""

    name: str = ""
    """Registry name (e.g., 'naive', 'hash', 'parallel')."""

    @abstractmethod
    def step(self, state: Any) -> Any:
        """Compute the next generation from state."""
        ...

    def prepare(self, grid: Grid) -> Any:
        """Convert a Grid into this engine's native state."""
        return grid

    def finish(self, state: Any) -> Grid:
        """Convert native state back into a Grid."""
        return state

    def advance(self, grid: Grid) -> Grid:
        """Compute one generation, Grid in and Grid out."""
        return self.finish(self.step(self.prepare(grid)))

    def close(self) -> None:
        """Release any resources held by the engine."""

    def __enter__(self) -> "Engine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
