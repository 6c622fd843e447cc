"""Defines states whose possibilities form a finite set of values."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Hashable, Iterator
from typing import Any, TYPE_CHECKING

from wavecollapse.errors import UnresolvedStateError
from wavecollapse.model.state import State

if TYPE_CHECKING:
    from wavecollapse.model.space import Space


class SetState(State):
    """Abstract state holding a finite set of hashable values that are still possible for a cell.

    The entropy of a set state is the number of possibilities minus one (never below 0), so a state with exactly one
    value left and an empty state both count as resolved. An empty state is a contradiction: the constraints of the
    neighborhood left nothing for this cell. Use is_contradiction() to tell the two resolved cases apart.
    """

    @abstractmethod
    def possibilities(self) -> frozenset[Hashable]:
        """Returns the values that are still possible."""
        pass

    @abstractmethod
    def retain(self, predicate: Callable[[Hashable], bool]) -> None:
        """Removes every value for which the predicate returns False."""
        pass

    @abstractmethod
    def collapse_to(self, value: Hashable) -> None:
        """Reduces the state to the single given value."""
        pass

    def entropy(self) -> int:
        return max(len(self) - 1, 0)

    def is_contradiction(self) -> bool:
        """Returns True if no possibilities are left."""
        return len(self) == 0

    def value(self) -> Hashable:
        """Returns the single remaining value of a resolved, non-contradictory state.

        Raises:
            UnresolvedStateError: If the state holds no value or more than one.
        """
        if len(self) != 1:
            raise UnresolvedStateError(f"Expected exactly one possibility, found {len(self)}")
        return next(iter(self))

    def __len__(self) -> int:
        return len(self.possibilities())

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.possibilities())

    def __contains__(self, value: object) -> bool:
        return value in self.possibilities()


def find_contradictions(space: Space[Any, Any, Any]) -> list[Hashable]:
    """Returns the coords of all cells of a space whose set state has run out of possibilities.

    Args:
        space: A space whose cells hold SetState instances, typically after collapse() returned.

    Returns:
        The coords of all contradictory cells, in the space's coordinate order.
    """
    return [coords for coords in space.coordinate_list() if space[coords].is_contradiction()]
