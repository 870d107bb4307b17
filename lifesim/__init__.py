"""Conway's Game of Life simulator.

Advances a fixed-size grid through a number of generations with one of
three interchangeable update engines:
- naive: dense per-cell full scan
- hash: live set plus frontier neighbor counts
- parallel: dense scan split into row bands on a thread pool

Getting started:
    from lifesim import Grid, Simulator, create_engine

    grid = Grid.from_text([".....", "..O..", "..O..", "..O..", "....."])
    final = Simulator().run(grid, 2, create_engine("hash"))
"""

# Core abstractions
from lifesim.core import (
    ComputeFailureError,
    ConfigurationError,
    Grid,
    LifeSimError,
    LoggingProgress,
    MalformedSeedError,
    OutOfBoundsError,
    Simulator,
    Topology,
    create_engine,
    get_engine,
    list_available_engines,
    register_engine,
)
from lifesim.interfaces import Engine, ProgressObserver

# Engine implementations (auto-registers when imported)
from lifesim.engines import LiveSet, NaiveEngine, ParallelEngine, SparseEngine

__all__ = [
    # Core
    "Grid",
    "Topology",
    "Simulator",
    "LoggingProgress",
    "Engine",
    "ProgressObserver",
    # Errors
    "LifeSimError",
    "ConfigurationError",
    "MalformedSeedError",
    "OutOfBoundsError",
    "ComputeFailureError",
    # Engine creation
    "create_engine",
    "get_engine",
    "list_available_engines",
    "register_engine",
    # Concrete engines
    "NaiveEngine",
    "SparseEngine",
    "ParallelEngine",
    "LiveSet",
]
