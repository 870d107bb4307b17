"""Interface abstractions for lifesim.

Defines behavioral contracts that all implementations must satisfy:
- Engine: generation-update strategy (abstract base class)
- ProgressObserver: receives a notification after every generation
"""

from lifesim.interfaces.engine import Engine
from lifesim.interfaces.progress import Observer, ProgressCallback, ProgressObserver

__all__ = [
    "Engine",
    "Observer",
    "ProgressCallback",
    "ProgressObserver",
]
