"""Contains the exception classes raised by the engine and its collaborators."""

from __future__ import annotations


class WFCError(Exception):
    """Base class for all errors raised by this package."""


class ObservationError(WFCError):
    """Raised when a collapse rule's observe() leaves its cell unresolved.

    The driver relies on every observation dropping the observed cell's entropy to 0. A rule that refuses to choose
    would otherwise cause the same cell to be selected over and over without making progress.
    """


class InvalidRuleError(WFCError, ValueError):
    """Raised when a collapse rule is constructed from inconsistent data."""


class CoordinateError(WFCError, IndexError):
    """Raised when a coordinate or coordinate delta does not fit the space."""


class UnresolvedStateError(WFCError):
    """Raised when the single value of a state is requested but the state holds zero or several possibilities."""
