"""Abstractions, driver and concrete collaborators of the WFC engine."""

from wavecollapse.model.collapse_rule import CollapseRule
from wavecollapse.model.cube_grid import CubeGrid
from wavecollapse.model.hashset_state import HashSetState
from wavecollapse.model.pattern_data import SampleAdjacency
from wavecollapse.model.set_rule import SetRule
from wavecollapse.model.set_state import SetState, find_contradictions
from wavecollapse.model.space import Space
from wavecollapse.model.state import State
from wavecollapse.model.wfc import WFC, collapse

__all__ = [
    "CollapseRule",
    "CubeGrid",
    "HashSetState",
    "SampleAdjacency",
    "SetRule",
    "SetState",
    "Space",
    "State",
    "WFC",
    "collapse",
    "find_contradictions",
]
