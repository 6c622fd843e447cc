"""Contains a set state backed by a Python set."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator

from wavecollapse.model.set_state import SetState


class HashSetState(SetState):
    """Set state storing its possibilities in a built-in set.

    Cloning copies the set, so snapshots taken by the driver never alias the state stored in the space.
    """

    # The values that are still possible for the cell.
    _values: set[Hashable]

    def __init__(self, values: Iterable[Hashable] = ()) -> None:
        """Creates a state holding the given values."""
        self._values = set(values)

    @classmethod
    def all(cls, values: Iterable[Hashable]) -> HashSetState:
        """Creates a fully undecided state allowing every given value."""
        return cls(values)

    @classmethod
    def of(cls, value: Hashable) -> HashSetState:
        """Creates a state that is already resolved to the given value."""
        return cls((value,))

    def possibilities(self) -> frozenset[Hashable]:
        return frozenset(self._values)

    def retain(self, predicate: Callable[[Hashable], bool]) -> None:
        self._values = {value for value in self._values if predicate(value)}

    def collapse_to(self, value: Hashable) -> None:
        self._values = {value}

    def clone(self) -> HashSetState:
        return HashSetState(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._values)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HashSetState):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"HashSetState({sorted(self._values, key=repr)!r})"
