"""Engine registry and factory.

Engines register themselves by decorating their class with
``@register_engine``; the class attribute ``name`` is the key the command
line selects them by. Importing ``lifesim.engines`` registers every
built-in engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Type, TypeVar

if TYPE_CHECKING:
    from lifesim.interfaces.engine import Engine

EngineT = TypeVar("EngineT", bound="Type[Engine]")


class EngineRegistry:
    """Maps engine names to engine classes.

    Registration happens at import time, before any worker threads exist,
    so no locking is done.
    """

    def __init__(self):
        self._engines: dict[str, Type[Engine]] = {}

    def register(self, engine_class: EngineT) -> EngineT:
        """Add engine_class under its ``name``; usable as a class decorator."""
        name = getattr(engine_class, "name", "")
        if not name:
            raise ValueError(f"{engine_class.__name__} has no engine name")
        existing = self._engines.get(name)
        if existing is not None and existing is not engine_class:
            raise ValueError(
                f"Engine name '{name}' is taken by {existing.__name__}"
            )
        self._engines[name] = engine_class
        return engine_class

    def get(self, name: str) -> Type[Engine]:
        try:
            return self._engines[name]
        except KeyError:
            raise ValueError(
                f"Unknown engine '{name}'. Available: {', '.join(self.names())}"
            ) from None

    def names(self) -> list[str]:
        """Registered names in sorted order."""
        return sorted(self._engines)

    def create(self, name: str, **kwargs: Any) -> Engine:
        return self.get(name)(**kwargs)


_REGISTRY = EngineRegistry()


def register_engine(engine_class: EngineT) -> EngineT:
    """Class decorator adding an engine to the global registry."""
    return _REGISTRY.register(engine_class)


def get_engine(name: str) -> Type[Engine]:
    return _REGISTRY.get(name)


def create_engine(name: str, **kwargs: Any) -> Engine:
    """Instantiate the engine registered as name with kwargs.

    Raises:
        ValueError: if no engine is registered under name
    """
    return _REGISTRY.create(name, **kwargs)


def list_available_engines() -> list[str]:
    return _REGISTRY.names()
