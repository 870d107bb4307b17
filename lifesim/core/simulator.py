"""Simulator for driving an engine through a run of generations."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from lifesim.core.grid import Grid
    from lifesim.interfaces.engine import Engine
    from lifesim.interfaces.progress import Observer

logger = logging.getLogger(__name__)


class Simulator:
    """Runs generations strictly in sequence and notifies observers.

    The simulator holds exactly one state value at a time and replaces it
    wholesale after each step; generation t+1 starts only after step t has
    returned.
    """

    def __init__(self) -> None:
        self._observers: List[Observer] = []
        self._elapsed = 0.0

    @property
    def elapsed(self) -> float:
        """Wall time of the last run in seconds."""
        return self._elapsed

    def subscribe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, generation: int, total: int) -> None:
        for observer in list(self._observers):
            on_generation = getattr(observer, "on_generation", None)
            if callable(on_generation):
                on_generation(generation, total)
            elif callable(observer):
                observer(generation, total)

    def run(self, initial_grid: "Grid", generations: int, engine: "Engine") -> "Grid":
        """Apply engine.step exactly generations times and return the result.

        Args:
            initial_grid: Generation 0
            generations: Number of steps; 0 returns initial_grid itself
            engine: Strategy used for every step

        Raises:
            ValueError: if generations is negative
            ComputeFailureError: if a parallel step fails; the remaining
                generations are not computed
        """
        if generations < 0:
            raise ValueError("generations must be >= 0")
        if generations == 0:
            self._elapsed = 0.0
            return initial_grid

        start = time.perf_counter()
        state = engine.prepare(initial_grid)
        for generation in range(1, generations + 1):
            state = engine.step(state)
            self._notify(generation, generations)
        final_grid = engine.finish(state)
        self._elapsed = time.perf_counter() - start

        logger.info(
            f"{generations} iterations took {self._elapsed * 1000:.0f} ms "
            f"using the {engine.name} implementation"
        )
        return final_grid
