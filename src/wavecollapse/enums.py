"""Contains all global enumeration classes used throughout the project."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Defines the cardinal directions used for 2D adjacency and neighbor offsets."""

    LEFT = 0
    """Left direction."""
    RIGHT = 1
    """Right direction."""
    UP = 2
    """Upward direction."""
    DOWN = 3
    """Downward direction."""

    def reverse(self) -> Direction:
        """Returns the opposite direction of the current direction."""
        match self:
            case Direction.LEFT:
                return Direction.RIGHT
            case Direction.RIGHT:
                return Direction.LEFT
            case Direction.UP:
                return Direction.DOWN
            case Direction.DOWN:
                return Direction.UP

    def to_vector(self) -> tuple[int, int]:
        """Returns the (row, col) vector representation for the direction."""
        match self:
            case Direction.LEFT:
                return (0, -1)
            case Direction.RIGHT:
                return (0, 1)
            case Direction.UP:
                return (-1, 0)
            case Direction.DOWN:
                return (1, 0)
