"""Shared pytest fixtures for wavecollapse tests."""

from __future__ import annotations

import random

import pytest

from wavecollapse import CubeGrid, SetRule, constants


# =============================================================================
# Rules
# =============================================================================


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source."""
    return random.Random(1234)


@pytest.fixture
def alternating_rule(rng: random.Random) -> SetRule:
    """A 1D rule requiring neighboring cells to take different values out of A and B."""
    return SetRule.symmetric(constants.CHAIN_NEIGHBOR_OFFSETS, [("A", 1, "B"), ("B", 1, "A")], rng=rng)


@pytest.fixture
def smooth_rule(rng: random.Random) -> SetRule:
    """A 2D rule over 0, 1 and 2 where neighboring values differ by at most one (never contradicts)."""
    offsets = CubeGrid.face_offsets(2)
    adjacencies = [(a, i, b) for a in range(3) for b in range(3) if abs(a - b) <= 1 for i in range(len(offsets))]
    return SetRule.symmetric(offsets, adjacencies, rng=rng)
