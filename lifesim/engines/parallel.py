"""Row-partitioned parallel engine.

The row index space is split into static, contiguous, non-overlapping bands.
Each band is computed on a worker thread from the shared read-only padded
input and written into its own slice of a freshly allocated output buffer,
so no cell is ever written by two workers and no locking is needed. The
numpy kernels release the GIL, which lets bands run concurrently.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from lifesim.core.engine_registry import register_engine
from lifesim.core.exceptions import ComputeFailureError, ConfigurationError
from lifesim.core.grid import Grid
from lifesim.core.rules import apply_rule
from lifesim.core.topology import band_neighbor_counts, pad_cells
from lifesim.interfaces.engine import Engine

logger = logging.getLogger(__name__)

RowBand = tuple[int, int]


def partition_rows(height: int, chunks: int) -> list[RowBand]:
    """Split range(height) into at most chunks contiguous [start, stop) bands.

    Band sizes differ by at most one row; earlier bands take the remainder.
    """
    if height <= 0:
        raise ValueError("height must be positive")
    if chunks <= 0:
        raise ValueError("chunks must be positive")

    chunks = min(chunks, height)
    base, extra = divmod(height, chunks)
    bands: list[RowBand] = []
    start = 0
    for i in range(chunks):
        stop = start + base + (1 if i < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


@register_engine
class ParallelEngine(Engine):
    """Dense engine whose per-row work is spread over a thread pool."""

    name = "parallel"

    def __init__(self, workers: Optional[int] = None, chunks: Optional[int] = None):
        """Initialize the engine.

        Args:
            workers: Thread count; defaults to the CPU count
            chunks: Number of row bands per step; defaults to workers.
                Capped at the grid height on every step.

        Raises:
            ConfigurationError: if workers or chunks is not positive
        """
        if workers is None:
            workers = os.cpu_count() or 1
        if chunks is None:
            chunks = workers
        if workers <= 0:
            raise ConfigurationError("parallel.workers", "must be a positive integer")
        if chunks <= 0:
            raise ConfigurationError("parallel.chunks", "must be a positive integer")

        self.workers = workers
        self.chunks = chunks
        self._executor: Optional[ThreadPoolExecutor] = None

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.workers,
                thread_name_prefix="lifesim_compute",
            )
        return self._executor

    def _compute_band(
        self,
        padded: NDArray[np.uint8],
        cells: NDArray[np.bool_],
        out: NDArray[np.bool_],
        band: RowBand,
    ) -> None:
        start, stop = band
        counts = band_neighbor_counts(padded, start, stop)
        out[start:stop] = apply_rule(cells[start:stop], counts)

    def step(self, state: Grid) -> Grid:
        cells = state.as_array()
        padded = pad_cells(cells, state.topology)
        out = np.empty_like(cells, dtype=np.bool_)
        bands = partition_rows(state.height, self.chunks)

        executor = self._get_executor()
        futures: dict[Future[None], RowBand] = {
            executor.submit(self._compute_band, padded, cells, out, band): band
            for band in bands
        }

        done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
        for future in not_done:
            future.cancel()
        # Let running bands finish so none writes into out after we return
        wait(not_done)

        for future in sorted(done, key=lambda f: futures[f]):
            exc = future.exception()
            if exc is not None:
                band = futures[future]
                logger.error(f"Worker failed on rows {band[0]}:{band[1]}: {exc}")
                raise ComputeFailureError(
                    f"Parallel step failed on rows {band[0]}:{band[1]}: {exc}",
                    rows=band,
                ) from exc

        return Grid(out, state.topology, copy=False)

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __repr__(self) -> str:
        return f"ParallelEngine(workers={self.workers}, chunks={self.chunks})"
