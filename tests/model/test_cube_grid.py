"""Tests for wavecollapse.model.cube_grid module."""

import numpy as np
import pytest

from wavecollapse import CoordinateError, CubeGrid, HashSetState


class TestCubeGrid:
    """Tests for CubeGrid."""

    def test_coordinate_list_is_row_major(self):
        grid = CubeGrid((2, 3), HashSetState.all("ab"))
        assert grid.coordinate_list() == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
        assert len(grid) == 6
        assert grid.ndim == 2

    def test_initial_state_is_cloned_per_cell(self):
        grid = CubeGrid((2,), HashSetState.all("ab"))
        grid[(0,)].collapse_to("a")
        assert grid[(1,)] == HashSetState.all("ab")

    def test_factory_receives_coords(self):
        grid = CubeGrid((2, 2), lambda coords: HashSetState.of(coords))
        assert grid[(1, 0)].value() == (1, 0)

    def test_setitem_replaces_state(self):
        grid = CubeGrid((2,), HashSetState.all("ab"))
        grid[(1,)] = HashSetState.of("b")
        assert grid[(1,)].value() == "b"

    def test_face_offsets(self):
        assert CubeGrid.face_offsets(1) == [(-1,), (1,)]
        assert CubeGrid.face_offsets(2) == [(-1, 0), (1, 0), (0, -1), (0, 1)]
        assert len(CubeGrid.face_offsets(3)) == 6

    def test_neighbors_at_boundary(self):
        grid = CubeGrid((3, 3), HashSetState.all("ab"))
        offsets = CubeGrid.face_offsets(2)
        out = [None] * len(offsets)

        grid.neighbors((0, 0), offsets, out)
        assert out == [None, (1, 0), None, (0, 1)]

        grid.neighbors((1, 1), offsets, out)
        assert out == [(0, 1), (2, 1), (1, 0), (1, 2)]

        grid.neighbors((2, 2), offsets, out)
        assert out == [(1, 2), None, (2, 1), None]

    def test_periodic_neighbors_wrap(self):
        grid = CubeGrid((3, 3), HashSetState.all("ab"), periodic=True)
        offsets = CubeGrid.face_offsets(2)
        out = [None] * len(offsets)

        grid.neighbors((0, 0), offsets, out)
        assert out == [(2, 0), (1, 0), (0, 2), (0, 1)]

    def test_out_of_bounds_access_raises(self):
        grid = CubeGrid((2, 2), HashSetState.all("ab"))
        with pytest.raises(CoordinateError):
            grid[(2, 0)]
        with pytest.raises(IndexError):
            grid[(0,)]

    def test_mismatched_delta_raises(self):
        grid = CubeGrid((2, 2), HashSetState.all("ab"))
        with pytest.raises(CoordinateError):
            grid.neighbors((0, 0), [(1,)], [None])

    def test_invalid_shape_raises(self):
        with pytest.raises(CoordinateError):
            CubeGrid((0, 2), HashSetState.all("ab"))

    def test_to_array(self):
        grid = CubeGrid((3,), HashSetState.all("ab"))
        grid[(0,)] = HashSetState.of("a")
        grid[(2,)] = HashSetState()

        values = grid.to_array(default="?")

        assert isinstance(values, np.ndarray)
        assert values.tolist() == ["a", "?", "?"]
