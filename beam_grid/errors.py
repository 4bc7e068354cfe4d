"""Exception hierarchy for the beam grid simulator."""

from __future__ import annotations


class BeamGridError(Exception):
    """Base class for all beam grid failures."""


class MalformedInputError(BeamGridError, ValueError):
    """Raised when a grid layout cannot be parsed."""


class OutOfRangeError(BeamGridError, IndexError):
    """Raised when a coordinate outside the board is looked up."""


class RoutingError(BeamGridError, RuntimeError):
    """Raised when a cell kind has no routing rule."""
