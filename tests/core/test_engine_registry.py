import pytest

from lifesim.core.engine_registry import (
    EngineRegistry,
    create_engine,
    get_engine,
    list_available_engines,
    register_engine,
)
from lifesim.engines import NaiveEngine, ParallelEngine, SparseEngine


class DummyEngine:
    name = "dummy"

    def __init__(self, **kwargs):
        self.kwargs = kwargs


def test_engine_registry_basic_operations():
    registry = EngineRegistry()
    assert registry.register(DummyEngine) is DummyEngine
    assert registry.get("dummy") is DummyEngine
    assert registry.names() == ["dummy"]

    instance = registry.create("dummy", foo=1)
    assert isinstance(instance, DummyEngine)
    assert instance.kwargs == {"foo": 1}

    with pytest.raises(ValueError, match="Available: dummy"):
        registry.get("missing")


def test_registering_same_class_twice_is_harmless():
    registry = EngineRegistry()
    registry.register(DummyEngine)
    registry.register(DummyEngine)
    assert registry.names() == ["dummy"]


def test_name_clash_rejected():
    class OtherDummy:
        name = "dummy"

    registry = EngineRegistry()
    registry.register(DummyEngine)
    with pytest.raises(ValueError, match="taken by DummyEngine"):
        registry.register(OtherDummy)


def test_nameless_class_rejected():
    class Nameless:
        pass

    with pytest.raises(ValueError, match="no engine name"):
        EngineRegistry().register(Nameless)


def test_names_are_sorted():
    class Zeta:
        name = "zeta"

    registry = EngineRegistry()
    registry.register(Zeta)
    registry.register(DummyEngine)
    assert registry.names() == ["dummy", "zeta"]


def test_decorator_uses_global_registry(monkeypatch):
    registry = EngineRegistry()
    monkeypatch.setattr("lifesim.core.engine_registry._REGISTRY", registry)

    @register_engine
    class Decorated:
        name = "decorated"

        def __init__(self, bar=0):
            self.bar = bar

    assert get_engine("decorated") is Decorated
    assert list_available_engines() == ["decorated"]
    assert create_engine("decorated", bar=2).bar == 2


def test_builtin_engines_registered_by_name():
    assert list_available_engines() == ["hash", "naive", "parallel"]
    assert get_engine("naive") is NaiveEngine
    assert get_engine("hash") is SparseEngine
    assert get_engine("parallel") is ParallelEngine


def test_create_parallel_engine_with_kwargs():
    with create_engine("parallel", workers=3, chunks=6) as engine:
        assert isinstance(engine, ParallelEngine)
        assert (engine.workers, engine.chunks) == (3, 6)
