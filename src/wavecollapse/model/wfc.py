"""Implements the core WFC algorithm: interleaved observation and constraint propagation."""

from __future__ import annotations

from collections import deque
import random
from typing import Any, Generic, TypeVar, TYPE_CHECKING

from wavecollapse.errors import ObservationError
from wavecollapse.logging_config import get_logger
from wavecollapse.model.state import State

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable

    from wavecollapse.model.collapse_rule import CollapseRule
    from wavecollapse.model.space import Space

St = TypeVar("St", bound=State)

logger = get_logger(__name__)


class WFC(Generic[St]):
    """Driver that collapses every cell of a space by repeatedly observing and propagating.

    The driver alternates between observing the undecided cell with the lowest entropy (ties are broken uniformly at
    random) and propagating the consequences of that observation to the neighboring cells until nothing shrinks any
    more. The space is made consistent with the rule before the first observation, so cells seeded with partial
    constraints are taken into account right away. Contradictions are not detected: a cell whose possibilities run out
    simply ends up with an entropy of 0 like any other resolved cell.

    All scratch buffers are allocated once in __init__() and reused for every step. A driver instance is meant for a
    single run() and keeps no state that is relevant afterwards; use the module-level collapse() function instead of
    creating instances directly.
    """

    # === CONSTRUCTOR PARAMETERS (initialized in __init__()) ===

    # The space whose cells get collapsed (mutated in place).
    _space: Space[St, Any, Any]
    # The domain rule that shrinks and observes cells.
    _rule: CollapseRule[St, Any]
    # Uniform integer sampler used to break ties between equally low entropy cells.
    _randrange: Callable[[int], int]

    # === SCRATCH BUFFERS (allocated in __init__(), reused across steps) ===

    # Coordinate deltas returned by the rule, fixed for the whole run.
    _neighbor_directions: list[Any]
    # Neighbor coords of the cell currently processed (None where the space ends).
    _neighbors: list[Hashable | None]
    # Snapshots of the states of the neighbors in '_neighbors' (None where the space ends).
    _neighbor_states: list[St | None]
    # FIFO queue of coords whose neighbors may have to react to a change (duplicates are allowed).
    _to_propagate: deque[Hashable]
    # Coords of cells that had an entropy above 0 when last checked. Insertion-ordered so the scan order is stable.
    _unresolved: dict[Hashable, None]
    # Coords of the cells sharing the lowest entropy found during the last selection.
    _lowest_entropy_candidates: list[Hashable]
    # Coords found to be resolved during the last selection, removed from '_unresolved' afterwards.
    _resolved: set[Hashable]

    # === RUN STATISTICS ===

    # Number of observe() calls made so far.
    _observation_count: int
    # Number of collapse() calls made so far.
    _propagation_count: int

    def __init__(
        self, space: Space[St, Any, Any], rule: CollapseRule[St, Any], rng: random.Random | None = None
    ) -> None:
        """Initializes the driver and allocates all scratch buffers.

        Args:
            space: The space whose cells get collapsed (mutated in place).
            rule: The domain rule that shrinks and observes cells.
            rng: Random source used to break ties between equally low entropy cells. Defaults to the process-wide
                source of the 'random' module.
        """
        self._space = space
        self._rule = rule
        self._randrange = rng.randrange if rng is not None else random.randrange

        self._neighbor_directions = list(rule.neighbor_offsets())
        direction_count = len(self._neighbor_directions)
        self._neighbors = [None] * direction_count
        self._neighbor_states = [None] * direction_count
        self._to_propagate = deque()
        self._unresolved = {}
        self._lowest_entropy_candidates = []
        self._resolved = set()

        self._observation_count = 0
        self._propagation_count = 0

    def run(self) -> None:
        """Collapses the space until every cell has an entropy of 0."""
        for coords in self._space.coordinate_list():
            if self._space[coords].entropy() > 0:
                self._unresolved[coords] = None

        logger.debug(
            f"Starting collapse | {len(self._unresolved)} unresolved cells | "
            f"{len(self._neighbor_directions)} neighbor directions"
        )

        # Make the initial space consistent with the rule before anything gets observed.
        self._to_propagate.extend(self._unresolved)
        self._propagate()

        while (next_coords := self._find_next_to_collapse()) is not None:
            self._observe_cell_at(next_coords)
            self._propagate()

        logger.debug(
            f"Collapse finished | {self._observation_count} observations | "
            f"{self._propagation_count} propagation steps"
        )

    def _find_next_to_collapse(self) -> Hashable | None:
        """Returns a random coord among the unresolved cells with the lowest entropy; prunes resolved cells."""
        lowest_entropy: float = float("inf")
        self._lowest_entropy_candidates.clear()
        self._resolved.clear()

        for coords in self._unresolved:
            entropy = self._space[coords].entropy()
            if entropy == 0:
                self._resolved.add(coords)
            elif entropy < lowest_entropy:
                lowest_entropy = entropy
                self._lowest_entropy_candidates.clear()
                self._lowest_entropy_candidates.append(coords)
            elif entropy == lowest_entropy:
                self._lowest_entropy_candidates.append(coords)

        for coords in self._resolved:
            del self._unresolved[coords]

        if not self._lowest_entropy_candidates:
            return None
        return self._lowest_entropy_candidates[self._randrange(len(self._lowest_entropy_candidates))]

    def _observe_cell_at(self, coords: Hashable) -> None:
        """Observes a cell; enqueues all of its neighbors for propagation."""
        self._to_propagate.clear()
        self._snapshot_neighbors(coords)

        cell = self._space[coords]
        self._rule.observe(cell, self._neighbor_states)
        self._observation_count += 1

        entropy = cell.entropy()
        if entropy != 0:
            raise ObservationError(f"Observing the cell at {coords!r} left it with an entropy of {entropy}")
        logger.debug(f"Observed cell {coords!r}")

        for neighbor_coords in self._neighbors:
            if neighbor_coords is not None:
                self._to_propagate.append(neighbor_coords)

    def _propagate(self) -> None:
        """Drains the propagation queue until no enqueued cell shrinks any more."""
        while self._to_propagate:
            coords = self._to_propagate.popleft()
            cell = self._space[coords]
            entropy_before = cell.entropy()

            # Resolved cells have nothing left to propagate and rules may assume their cell is still undecided.
            if entropy_before == 0:
                continue

            self._snapshot_neighbors(coords)
            self._rule.collapse(cell, self._neighbor_states)
            self._propagation_count += 1
            entropy_after = cell.entropy()

            if entropy_after < entropy_before:
                for neighbor_coords in self._neighbors:
                    if neighbor_coords is not None and self._space[neighbor_coords].entropy() != 0:
                        self._to_propagate.append(neighbor_coords)

    def _snapshot_neighbors(self, coords: Hashable) -> None:
        """Fills the neighbor buffers with the neighbor coords of a cell and clones of their states."""
        self._space.neighbors(coords, self._neighbor_directions, self._neighbors)
        for i, neighbor_coords in enumerate(self._neighbors):
            self._neighbor_states[i] = self._space[neighbor_coords].clone() if neighbor_coords is not None else None


def collapse(space: Space[St, Any, Any], rule: CollapseRule[St, Any], rng: random.Random | None = None) -> None:
    """Performs the wave function collapse algorithm on a space with the provided collapse rule.

    The space is mutated in place until every cell has an entropy of 0. Cells that run out of possibilities are left
    empty (entropy 0 as well); detecting such contradictions is up to the caller, e.g. via
    wavecollapse.model.set_state.find_contradictions().

    Args:
        space: The space to collapse. Its cells should already hold their initial states.
        rule: The rule defining neighbor directions, constraint propagation and observation.
        rng: Random source used to break ties between equally low entropy cells. Pass a seeded random.Random for
            reproducible runs. Defaults to the process-wide source of the 'random' module.

    Raises:
        ObservationError: If the rule's observe() leaves a cell with an entropy above 0.
    """
    WFC(space, rule, rng).run()
