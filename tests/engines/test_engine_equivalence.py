"""All engines must agree cell-for-cell on every input."""

import pytest

from lifesim.core.engine_registry import create_engine
from lifesim.core.grid import Grid
from lifesim.core.simulator import Simulator
from lifesim.core.topology import Topology

SIZES = [(1, 1), (1, 5), (2, 3), (7, 1), (3, 3), (16, 9), (31, 17)]


def _run_all(grid, generations):
    results = {}
    for name in ("naive", "hash", "parallel"):
        kwargs = {"workers": 3, "chunks": 5} if name == "parallel" else {}
        with create_engine(name, **kwargs) as engine:
            results[name] = Simulator().run(grid, generations, engine)
    return results


@pytest.mark.parametrize("topology", list(Topology))
@pytest.mark.parametrize("width,height", SIZES)
@pytest.mark.parametrize("generations", [1, 6])
def test_engines_agree_on_random_grids(width, height, topology, generations):
    grid = Grid.random(width, height, density=0.45, seed=width * 100 + height, topology=topology)

    results = _run_all(grid, generations)

    assert results["naive"] == results["hash"] == results["parallel"]
    assert results["naive"].topology is topology


@pytest.mark.parametrize("topology", list(Topology))
def test_engines_agree_on_full_grid(topology):
    grid = Grid.from_text(["OOOO", "OOOO", "OOOO"], topology=topology)
    results = _run_all(grid, 3)
    assert results["naive"] == results["hash"] == results["parallel"]


def test_corner_birth_only_on_torus():
    cells = [(4, 4), (0, 4), (4, 0)]
    toroidal = Grid.from_live_cells(cells, width=5, height=5, topology=Topology.TOROIDAL)
    bounded = Grid.from_live_cells(cells, width=5, height=5, topology=Topology.BOUNDED)

    for result in _run_all(toroidal, 1).values():
        assert result.get(0, 0)
    for result in _run_all(bounded, 1).values():
        assert not result.get(0, 0)


def test_zero_generations_returns_input_for_every_engine(glider_grid):
    for result in _run_all(glider_grid, 0).values():
        assert result is glider_grid
