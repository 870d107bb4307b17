"""Generation-update engines.

Each engine module registers its class under its command-line name:
- naive: dense per-cell full scan
- hash: live set plus frontier neighbor counts
- parallel: dense scan split into row bands on a thread pool
"""

from lifesim.engines.naive import NaiveEngine
from lifesim.engines.parallel import ParallelEngine, partition_rows
from lifesim.engines.sparse import LiveSet, SparseEngine

__all__ = [
    "LiveSet",
    "NaiveEngine",
    "ParallelEngine",
    "SparseEngine",
    "partition_rows",
]
