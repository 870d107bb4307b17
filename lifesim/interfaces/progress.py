"""Progress observer interface for simulation runs."""

from __future__ import annotations

from typing import Callable, Protocol, Union


class ProgressObserver(Protocol):
    """Anything that wants to hear about completed generations."""

    def on_generation(self, generation: int, total: int) -> None:
        """Called after generation (1-based) of total has been computed."""
        ...


ProgressCallback = Callable[[int, int], None]

Observer = Union[ProgressObserver, ProgressCallback]
