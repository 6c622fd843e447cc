"""Defines the abstract domain rule that drives collapse and observation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Generic, TypeVar

from wavecollapse.model.state import State

St = TypeVar("St", bound=State)
D = TypeVar("D")


class CollapseRule(ABC, Generic[St, D]):
    """Abstract base class for the domain knowledge used by the WFC driver.

    A collapse rule decides which neighbor directions matter, how a cell shrinks given snapshots of its neighbors and
    how a single possibility is chosen when a cell gets observed. The neighbor snapshots passed to collapse() and
    observe() are aligned with neighbor_offsets(): entry i belongs to the neighbor in direction i, or is None if that
    neighbor does not exist.
    """

    @abstractmethod
    def neighbor_offsets(self) -> list[D]:
        """Returns the fixed list of coordinate deltas the rule considers."""
        pass

    @abstractmethod
    def collapse(self, cell: St, neighbors: Sequence[St | None]) -> None:
        """Shrinks the cell's possibilities to those compatible with the neighbor snapshots.

        Must never grow the cell's entropy and must be deterministic: the result may only depend on the cell and its
        neighbors, never on a random source. Only called on cells whose entropy is above 0.
        """
        pass

    @abstractmethod
    def observe(self, cell: St, neighbors: Sequence[St | None]) -> None:
        """Reduces the cell to exactly one possibility, leaving it with an entropy of 0.

        May use the rule's own random source, typically for weighted sampling over the remaining possibilities.
        """
        pass
