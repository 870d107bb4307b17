"""Core modules for lifesim.

Core infrastructure shared by every engine:
- exceptions: error hierarchy rooted at LifeSimError
- topology: boundary policy and Moore-neighborhood helpers
- rules: the B3/S23 survive/birth rule
- grid: immutable cell matrix
- engine_registry: engine registry and factory
- simulator: sequential generation driver with progress notification
"""

from lifesim.core.engine_registry import (
    EngineRegistry,
    create_engine,
    get_engine,
    list_available_engines,
    register_engine,
)
from lifesim.core.exceptions import (
    ComputeFailureError,
    ConfigurationError,
    LifeSimError,
    MalformedSeedError,
    OutOfBoundsError,
)
from lifesim.core.grid import Grid
from lifesim.core.progress import LoggingProgress
from lifesim.core.rules import apply_rule, next_state
from lifesim.core.simulator import Simulator
from lifesim.core.topology import DEFAULT_TOPOLOGY, Topology

__all__ = [
    # Errors
    "LifeSimError",
    "ConfigurationError",
    "MalformedSeedError",
    "OutOfBoundsError",
    "ComputeFailureError",
    # Grid model
    "Grid",
    "Topology",
    "DEFAULT_TOPOLOGY",
    "next_state",
    "apply_rule",
    # Engine registry
    "EngineRegistry",
    "create_engine",
    "get_engine",
    "list_available_engines",
    "register_engine",
    # Running
    "Simulator",
    "LoggingProgress",
]
