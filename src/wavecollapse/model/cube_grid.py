"""Contains an n-dimensional rectangular grid space backed by a numpy array."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence, Sequence
from typing import Any, TypeVar, TYPE_CHECKING

import numpy as np

from wavecollapse.errors import CoordinateError
from wavecollapse.model.set_state import SetState
from wavecollapse.model.space import Space
from wavecollapse.model.state import State

if TYPE_CHECKING:
    from numpy.typing import NDArray

St = TypeVar("St", bound=State)

Coordinate = tuple[int, ...]
CoordinateDelta = tuple[int, ...]


class CubeGrid(Space[St, Coordinate, CoordinateDelta]):
    """Space of cells laid out on an n-dimensional rectangular grid.

    Coordinates are tuples of ints with one entry per axis and coordinate deltas are tuples of the same length. Cells
    are stored in a numpy object array, so each cell holds its own state instance that can be mutated in place.

    Attributes:
        shape: The size of the grid along each axis (in cells).
        periodic: If True, the grid wraps around along every axis and no cell lies on a boundary.
    """

    shape: tuple[int, ...]
    periodic: bool

    # The numpy object array holding one state per cell.
    _cell_grid: NDArray[Any]
    # Cached list of all coords in row-major order.
    _coordinate_list: list[Coordinate]

    def __init__(
        self, shape: Sequence[int], initial: St | Callable[[Coordinate], St], periodic: bool = False
    ) -> None:
        """Creates the grid and fills every cell with its initial state.

        Args:
            shape: The size of the grid along each axis (in cells). Every size must be at least 1.
            initial: Either a state that gets cloned into every cell, or a factory returning the initial state for a
                given coordinate.
            periodic: If True, the grid wraps around along every axis. Defaults to False.
        """
        self.shape = tuple(int(size) for size in shape)
        if not self.shape or any(size < 1 for size in self.shape):
            raise CoordinateError(f"Invalid grid shape {self.shape!r}")
        self.periodic = periodic

        self._cell_grid = np.empty(self.shape, dtype=object)
        self._coordinate_list = [tuple(int(i) for i in coords) for coords in np.ndindex(*self.shape)]

        for coords in self._coordinate_list:
            self._cell_grid[coords] = initial.clone() if isinstance(initial, State) else initial(coords)

    @property
    def ndim(self) -> int:
        """The number of axes of the grid."""
        return len(self.shape)

    @staticmethod
    def face_offsets(ndim: int) -> list[CoordinateDelta]:
        """Returns the 2 * ndim axis-aligned unit deltas (negative before positive direction, axis by axis)."""
        offsets = []
        for axis in range(ndim):
            for step in (-1, 1):
                offset = [0] * ndim
                offset[axis] = step
                offsets.append(tuple(offset))
        return offsets

    def coordinate_list(self) -> list[Coordinate]:
        return list(self._coordinate_list)

    def __getitem__(self, coords: Coordinate) -> St:
        return self._cell_grid[self._check_coords(coords)]

    def __setitem__(self, coords: Coordinate, state: St) -> None:
        self._cell_grid[self._check_coords(coords)] = state

    def __len__(self) -> int:
        return len(self._coordinate_list)

    def neighbors(
        self, coords: Coordinate, deltas: Sequence[CoordinateDelta], out: MutableSequence[Coordinate | None]
    ) -> None:
        for i, delta in enumerate(deltas):
            if len(delta) != self.ndim:
                raise CoordinateError(f"Delta {delta!r} does not match the grid dimensionality {self.ndim}")
            out[i] = self._offset(coords, delta)

    def to_array(self, default: Any = None) -> NDArray[Any]:
        """Returns an array of the resolved values of all cells.

        Only meaningful for grids of set states. Cells that are unresolved or contradictory get the default value.

        Args:
            default: The value used for cells that do not hold exactly one possibility. Defaults to None.
        """
        values = np.full(self.shape, default, dtype=object)
        for coords in self._coordinate_list:
            cell = self._cell_grid[coords]
            if isinstance(cell, SetState) and len(cell) == 1:
                values[coords] = cell.value()
        return values

    def _offset(self, coords: Coordinate, delta: CoordinateDelta) -> Coordinate | None:
        """Applies a delta to a coord; returns None if the result lies outside of a non-periodic grid."""
        moved = []
        for position, step, size in zip(coords, delta, self.shape):
            position += step
            if self.periodic:
                position %= size
            elif position < 0 or position >= size:
                return None
            moved.append(position)
        return tuple(moved)

    def _check_coords(self, coords: Coordinate) -> Coordinate:
        """Raises a CoordinateError unless the coord lies inside the grid."""
        if len(coords) != self.ndim or any(not 0 <= position < size for position, size in zip(coords, self.shape)):
            raise CoordinateError(f"Coordinate {coords!r} lies outside of the grid with shape {self.shape!r}")
        return coords
