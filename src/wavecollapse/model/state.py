"""Defines the abstract cell state operated on by the WFC driver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

S = TypeVar("S", bound="State")


class State(ABC):
    """Abstract base class for the remaining possibilities of a single cell.

    The driver only ever looks at a state's entropy and clones states to hand neighbor snapshots to the collapse rule.
    Everything else about a state (what the possibilities are, how they are stored) is up to the concrete class and
    the rule that operates on it.

    An entropy of 0 means the cell is resolved: it has either been reduced to exactly one possibility or to none at
    all. Both are terminal for the driver. An entropy above 0 means the cell is still undecided.
    """

    @abstractmethod
    def entropy(self) -> int:
        """Returns the entropy of the state (0 for resolved states, > 0 otherwise)."""
        pass

    @abstractmethod
    def clone(self: S) -> S:
        """Returns an independent snapshot that is equal by value to this state."""
        pass

    def is_resolved(self) -> bool:
        """Returns True if the state has no entropy left."""
        return self.entropy() == 0
