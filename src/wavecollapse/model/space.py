"""Defines the abstract container of cells the WFC driver works on."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, MutableSequence, Sequence
from typing import Generic, TypeVar

from wavecollapse.model.state import State

St = TypeVar("St", bound=State)
C = TypeVar("C", bound=Hashable)
D = TypeVar("D")


class Space(ABC, Generic[St, C, D]):
    """Abstract base class for an indexed collection of cells and its topology.

    A space maps coordinates (type parameter C) to states (type parameter St) and knows how coordinates relate to each
    other: applying a coordinate delta (type parameter D) to a coordinate yields either a neighboring coordinate or
    nothing, if the delta leads out of the space.
    """

    @abstractmethod
    def coordinate_list(self) -> list[C]:
        """Returns every coordinate of the space exactly once, in an order that is stable between calls."""
        pass

    @abstractmethod
    def __getitem__(self, coord: C) -> St:
        """Returns the state of the cell at the given coordinate."""
        pass

    @abstractmethod
    def __setitem__(self, coord: C, state: St) -> None:
        """Replaces the state of the cell at the given coordinate."""
        pass

    @abstractmethod
    def neighbors(self, coord: C, deltas: Sequence[D], out: MutableSequence[C | None]) -> None:
        """Looks up the neighbors of a cell, writing them into a caller-owned buffer.

        Args:
            coord: The coordinate of the cell whose neighbors are looked up.
            deltas: The coordinate deltas to apply to the coordinate.
            out: Buffer of the same length as deltas. out[i] is set to the coordinate reached by applying deltas[i] to
                coord, or to None if no such cell exists.
        """
        pass

    def __len__(self) -> int:
        return len(self.coordinate_list())
