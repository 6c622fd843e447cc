"""Derives 2D adjacency rules from a sample array of tile values."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import numpy as np

from wavecollapse.enums import Direction
from wavecollapse.logging_config import get_logger
from wavecollapse.model.hashset_state import HashSetState
from wavecollapse.model.set_rule import SetRule

if TYPE_CHECKING:
    from numpy.typing import NDArray

logger = get_logger(__name__)


class SampleAdjacency:
    """Learns which tiles may be placed next to each other from a 2D sample array.

    Each distinct value of the sample array is treated as a tile (a pattern of size 1x1). Two tiles are compatible in a
    direction exactly if they occur directly next to each other in that direction at least once in the sample. The
    number of occurrences of each tile in the sample is used as its observation weight.

    Attributes:
        tiles: The distinct tile values of the sample, in order of first occurrence (row by row).
        tile_count: The number of distinct tiles.
    """

    tiles: list[int]
    tile_count: int

    # The 2D sample tile array the adjacency rules are learned from.
    _sample_array: NDArray[np.int_]
    # The number of occurrences of each tile in the sample (indexed like 'tiles').
    _frequency_hints: NDArray[np.int_]
    # The 3D boolean array defining compatibility: [t1, t2, direction] is True exactly if tile t2 occurs next to tile
    # t1 in the specified direction.
    _adjacency_rules: NDArray[np.bool_]

    def __init__(self, sample_array: NDArray[np.int_]) -> None:
        """Extracts the tiles of the sample array and determines their adjacency rules.

        Args:
            sample_array: The 2D sample tile array the adjacency rules are learned from.
        """
        self._sample_array = np.asarray(sample_array)
        if self._sample_array.ndim != 2 or self._sample_array.size == 0:
            raise ValueError(f"Expected a non-empty 2D sample array, got shape {self._sample_array.shape}")

        self._extract_and_count_tiles()
        self._determine_adjacency_rules()

        logger.debug(f"Learned adjacency from sample {self._sample_array.shape} | {self.tile_count} tiles")

    def get_compatible_tiles(self, tile: int, direction: Direction) -> list[int]:
        """Returns all tiles that may be placed next to a tile in a direction.

        Args:
            tile: The tile value to check compatibility for.
            direction: The direction to check compatibility for.

        Returns:
            A list of all tile values that occur next to the given tile in the given direction in the sample.
        """
        tile_index = self.tiles.index(tile)
        return [
            self.tiles[other_index]
            for other_index in range(self.tile_count)
            if self._adjacency_rules[tile_index, other_index, direction.value]
        ]

    def get_frequency(self, tile: int) -> int:
        """Returns the number of occurrences of a tile in the sample."""
        return int(self._frequency_hints[self.tiles.index(tile)])

    def initial_state(self) -> HashSetState:
        """Returns a fully undecided state allowing every tile of the sample."""
        return HashSetState.all(self.tiles)

    def to_rule(self, rng: random.Random | None = None) -> SetRule:
        """Builds a set rule from the learned adjacency, using tile frequencies as observation weights.

        The offsets of the rule are the (row, col) vectors of the Direction members, in Direction order.

        Args:
            rng: Random source used for weighted observation. Defaults to None (a new, unseeded random.Random).
        """
        offsets = [direction.to_vector() for direction in Direction]
        allowed = {tile: [self.get_compatible_tiles(tile, direction) for direction in Direction] for tile in self.tiles}
        weights = {tile: float(self._frequency_hints[i]) for i, tile in enumerate(self.tiles)}
        return SetRule(offsets, allowed, weights, rng)

    def _extract_and_count_tiles(self) -> None:
        """Extracts all distinct tiles and counts their frequency."""
        self.tiles = []
        frequencies: dict[int, int] = {}

        for row in range(self._sample_array.shape[0]):
            for col in range(self._sample_array.shape[1]):
                tile = self._sample_array[row, col].item()
                if tile not in frequencies:
                    self.tiles.append(tile)
                    frequencies[tile] = 1
                else:
                    frequencies[tile] += 1

        self.tile_count = len(self.tiles)
        self._frequency_hints = np.array([frequencies[tile] for tile in self.tiles], dtype=np.int_)

    def _determine_adjacency_rules(self) -> None:
        """Extracts allowed tile adjacencies directly from the sample array."""
        self._adjacency_rules = np.full((self.tile_count, self.tile_count, len(Direction)), False, dtype=bool)
        tile_indices = {tile: index for index, tile in enumerate(self.tiles)}
        rows, cols = self._sample_array.shape

        # adjacency_rules[t1, t2, direction] is True if and only if t2 is found one step to the left of / to the right
        # of / above / below t1 (according to the specified direction) somewhere in the sample array. Only the right
        # and downward neighbors are scanned; the left and upward entries are the mirrored adjacencies.
        for row in range(rows):
            for col in range(cols):
                tile_index = tile_indices[self._sample_array[row, col].item()]
                for direction in (Direction.RIGHT, Direction.DOWN):
                    neighbor_row = row + direction.to_vector()[0]
                    neighbor_col = col + direction.to_vector()[1]

                    if neighbor_row >= rows or neighbor_col >= cols:
                        continue

                    neighbor_tile_index = tile_indices[self._sample_array[neighbor_row, neighbor_col].item()]
                    self._adjacency_rules[tile_index, neighbor_tile_index, direction.value] = True
                    self._adjacency_rules[neighbor_tile_index, tile_index, direction.reverse().value] = True
