"""Wave function collapse: a generic constraint-propagation solver over spaces of cells.

Iteratively "collapses" a collection of cells (such as a square grid) from all possible states to only the states
possible with a given rule, selecting randomly where ambiguous.
"""

from wavecollapse.enums import Direction
from wavecollapse.errors import (
    CoordinateError,
    InvalidRuleError,
    ObservationError,
    UnresolvedStateError,
    WFCError,
)
from wavecollapse.model import (
    WFC,
    CollapseRule,
    CubeGrid,
    HashSetState,
    SampleAdjacency,
    SetRule,
    SetState,
    Space,
    State,
    collapse,
    find_contradictions,
)

__version__ = "0.1.0"

__all__ = [
    "CollapseRule",
    "CoordinateError",
    "CubeGrid",
    "Direction",
    "HashSetState",
    "InvalidRuleError",
    "ObservationError",
    "SampleAdjacency",
    "SetRule",
    "SetState",
    "Space",
    "State",
    "UnresolvedStateError",
    "WFC",
    "WFCError",
    "collapse",
    "find_contradictions",
]
