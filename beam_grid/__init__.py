"""Beam Grid package."""

from .engine import DEFAULT_ENTRY, Beam, BeamSimulator, count_energized, propagate, route
from .errors import BeamGridError, MalformedInputError, OutOfRangeError, RoutingError
from .grid import CellKind, Direction, Grid, GridLoader
from .search import SearchResult, entry_beams, find_best_entry, max_energized
from .tracker import BeamStateTracker

__all__ = [
    "DEFAULT_ENTRY",
    "Beam",
    "BeamGridError",
    "BeamSimulator",
    "BeamStateTracker",
    "CellKind",
    "Direction",
    "Grid",
    "GridLoader",
    "MalformedInputError",
    "OutOfRangeError",
    "RoutingError",
    "SearchResult",
    "count_energized",
    "entry_beams",
    "find_best_entry",
    "max_energized",
    "propagate",
    "route",
]
