"""Contains a collapse rule over set states, driven by a table of allowed neighbor values."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping, Sequence
import random
from typing import TYPE_CHECKING

from wavecollapse import constants
from wavecollapse.errors import InvalidRuleError
from wavecollapse.logging_config import get_logger
from wavecollapse.model.collapse_rule import CollapseRule

if TYPE_CHECKING:
    from wavecollapse.model.set_state import SetState

logger = get_logger(__name__)

Offset = tuple[int, ...]


class SetRule(CollapseRule["SetState", Offset]):
    """Collapse rule defined by which values may sit next to each other in each neighbor direction.

    For every value the rule knows one set of allowed neighbor values per neighbor offset: allowed[v][i] holds the
    values the neighbor in direction offsets[i] may take while the cell takes v. A value stays possible for a cell as
    long as every existing neighbor still has at least one value allowed next to it. Missing neighbors (at the
    boundary of the space) impose no constraint. Values without an entry in the table are never allowed next to an
    existing neighbor.

    Attributes:
        values: All values known to the rule, in the order used for observation (and thus for random sampling).
    """

    values: list[Hashable]

    # Coordinate deltas of the neighbors the rule considers.
    _offsets: list[Offset]
    # For each value, one frozenset of allowed neighbor values per offset.
    _allowed: dict[Hashable, tuple[frozenset[Hashable], ...]]
    # Relative probability of each value being picked when a cell gets observed.
    _weights: dict[Hashable, float]
    # Random source used for weighted observation.
    _rng: random.Random

    def __init__(
        self,
        offsets: Sequence[Offset],
        allowed: Mapping[Hashable, Sequence[Iterable[Hashable]]],
        weights: Mapping[Hashable, float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Creates the rule and validates its adjacency table.

        Args:
            offsets: Coordinate deltas of the neighbors the rule considers.
            allowed: Maps each value to one collection of allowed neighbor values per offset (aligned with offsets).
            weights: Relative probability of each value being picked on observation. Values without an entry get
                constants.SET_RULE_DEFAULT_WEIGHT. Defaults to None (all values weighted equally).
            rng: Random source used for weighted observation. Defaults to a new, unseeded random.Random.

        Raises:
            InvalidRuleError: If an entry of the table does not have one collection per offset, or if weights are not
                positive or refer to unknown values.
        """
        self._offsets = [tuple(offset) for offset in offsets]
        self._allowed = {}
        for value, neighbor_values in allowed.items():
            if len(neighbor_values) != len(self._offsets):
                raise InvalidRuleError(
                    f"Value {value!r} lists {len(neighbor_values)} neighbor sets for {len(self._offsets)} offsets"
                )
            self._allowed[value] = tuple(frozenset(values) for values in neighbor_values)
        self.values = list(self._allowed)

        weights = dict(weights) if weights is not None else {}
        unknown_values = [value for value in weights if value not in self._allowed]
        if unknown_values:
            raise InvalidRuleError(f"Weights given for unknown values {unknown_values!r}")
        self._weights = {value: float(weights.get(value, constants.SET_RULE_DEFAULT_WEIGHT)) for value in self.values}
        non_positive = [value for value, weight in self._weights.items() if not weight > 0]
        if non_positive:
            raise InvalidRuleError(f"Weights must be positive, got non-positive weights for {non_positive!r}")

        self._rng = rng if rng is not None else random.Random()

        logger.debug(f"Created set rule | {len(self.values)} values | {len(self._offsets)} offsets")

    @classmethod
    def symmetric(
        cls,
        offsets: Sequence[Offset],
        adjacencies: Iterable[tuple[Hashable, int, Hashable]],
        weights: Mapping[Hashable, float] | None = None,
        rng: random.Random | None = None,
    ) -> SetRule:
        """Creates a rule from adjacency triples, adding the mirrored adjacency for every triple.

        A triple (a, i, b) allows b to sit at offsets[i] relative to a. It also allows a to sit at the opposite offset
        relative to b, so the resulting table is always consistent in both directions.

        Args:
            offsets: Coordinate deltas of the neighbors the rule considers. Each offset's negation must be listed too.
            adjacencies: Triples of (value, offset index, neighbor value).
            weights: Relative probability of each value being picked on observation. Defaults to None.
            rng: Random source used for weighted observation. Defaults to None.

        Raises:
            InvalidRuleError: If an offset's opposite is missing or an offset index is out of range.
        """
        offsets = [tuple(offset) for offset in offsets]
        opposite_indices = []
        for offset in offsets:
            opposite = tuple(-step for step in offset)
            if opposite not in offsets:
                raise InvalidRuleError(f"Offset {offset!r} has no opposite offset {opposite!r}")
            opposite_indices.append(offsets.index(opposite))

        allowed: dict[Hashable, list[set[Hashable]]] = {}
        for value, index, neighbor_value in adjacencies:
            if not 0 <= index < len(offsets):
                raise InvalidRuleError(f"Offset index {index} is out of range for {len(offsets)} offsets")
            for known_value in (value, neighbor_value):
                if known_value not in allowed:
                    allowed[known_value] = [set() for _ in offsets]
            allowed[value][index].add(neighbor_value)
            allowed[neighbor_value][opposite_indices[index]].add(value)

        return cls(offsets, allowed, weights, rng)

    def neighbor_offsets(self) -> list[Offset]:
        return list(self._offsets)

    def weight(self, value: Hashable) -> float:
        """Returns the observation weight of a value."""
        return self._weights[value]

    def allows(self, value: Hashable, neighbors: Sequence[SetState | None]) -> bool:
        """Returns True if every existing neighbor has at least one value allowed next to the value."""
        allowed = self._allowed.get(value)
        for i, neighbor in enumerate(neighbors):
            if neighbor is None:
                continue
            if allowed is None or allowed[i].isdisjoint(neighbor):
                return False
        return True

    def collapse(self, cell: SetState, neighbors: Sequence[SetState | None]) -> None:
        cell.retain(lambda value: self.allows(value, neighbors))

    def observe(self, cell: SetState, neighbors: Sequence[SetState | None]) -> None:
        # Iterate the rule's own value order so seeded rules sample reproducibly.
        candidates = [value for value in self.values if value in cell]
        candidates.extend(sorted((value for value in cell if value not in self._allowed), key=repr))

        consistent = [value for value in candidates if self.allows(value, neighbors)]
        if consistent:
            candidates = consistent
        if not candidates:
            return

        weights = [self._weights.get(value, constants.SET_RULE_DEFAULT_WEIGHT) for value in candidates]
        cell.collapse_to(self._rng.choices(candidates, weights=weights)[0])
