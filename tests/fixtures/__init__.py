"""Test fixtures shared by the wavecollapse test suite."""

from .rules import RecordingRule, SnapshotWritingRule, StubbornRule
from .spaces import chain_values, make_chain

__all__ = [
    # Rules
    "RecordingRule",
    "SnapshotWritingRule",
    "StubbornRule",
    # Spaces
    "chain_values",
    "make_chain",
]
