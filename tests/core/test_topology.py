import numpy as np
import pytest

from lifesim.core.topology import (
    MOORE_OFFSETS,
    Topology,
    band_neighbor_counts,
    neighbor_coords,
    pad_cells,
)


def test_moore_offsets():
    assert len(MOORE_OFFSETS) == 8
    assert (0, 0) not in MOORE_OFFSETS
    assert set(MOORE_OFFSETS) == {(-dx, -dy) for dx, dy in MOORE_OFFSETS}


def test_topology_parse():
    assert Topology.parse("toroidal") is Topology.TOROIDAL
    assert Topology.parse(" Bounded ") is Topology.BOUNDED
    assert Topology.parse(Topology.BOUNDED) is Topology.BOUNDED
    with pytest.raises(ValueError):
        Topology.parse("klein-bottle")


def test_toroidal_corner_neighbors_wrap():
    coords = set(neighbor_coords(0, 0, 5, 4, Topology.TOROIDAL))
    assert coords == {(4, 3), (0, 3), (1, 3), (4, 0), (1, 0), (4, 1), (0, 1), (1, 1)}


def test_bounded_corner_neighbors_clipped():
    coords = list(neighbor_coords(0, 0, 5, 4, Topology.BOUNDED))
    assert sorted(coords) == [(0, 1), (1, 0), (1, 1)]


def test_toroidal_narrow_grid_repeats_coordinates():
    coords = list(neighbor_coords(0, 0, 2, 1, Topology.TOROIDAL))
    assert len(coords) == 8
    assert coords.count((1, 0)) == 6
    assert coords.count((0, 0)) == 2


@pytest.mark.parametrize("topology", list(Topology))
def test_pad_cells_is_read_only(topology):
    padded = pad_cells(np.ones((3, 4), dtype=bool), topology)
    assert padded.shape == (5, 6)
    assert not padded.flags.writeable


def test_pad_cells_halo_contents():
    cells = np.array([[1, 0, 0], [0, 0, 1]], dtype=bool)
    wrapped = pad_cells(cells, Topology.TOROIDAL)
    bounded = pad_cells(cells, Topology.BOUNDED)
    # Top halo row is the wrapped bottom row; corner is the opposite corner
    assert wrapped[0, 1:4].tolist() == [0, 0, 1]
    assert wrapped[0, 0] == cells[1, 2]
    assert bounded[0].tolist() == [0] * 5
    assert bounded[:, 0].tolist() == [0] * 4


@pytest.mark.parametrize("topology", list(Topology))
def test_band_counts_match_scalar_walk(topology):
    rng = np.random.default_rng(5)
    cells = rng.random((6, 7)) < 0.4
    padded = pad_cells(cells, topology)
    counts = np.vstack(
        [band_neighbor_counts(padded, 0, 2), band_neighbor_counts(padded, 2, 6)]
    )
    for y in range(6):
        for x in range(7):
            expected = sum(
                int(cells[ny, nx]) for nx, ny in neighbor_coords(x, y, 7, 6, topology)
            )
            assert counts[y, x] == expected
