"""Beam propagation: routing table, work-list simulation and coverage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from .errors import RoutingError
from .grid import CellKind, Direction, Grid, Position
from .tracker import BeamStateTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Beam:
    """A beam head at ``position`` travelling in ``direction``.

    The position may sit one step outside the board, which is how a beam
    about to enter from an edge is expressed.
    """

    position: Position
    direction: Direction

    def next_position(self) -> Position:
        return self.direction.step(self.position)

    def as_payload(self) -> Dict[str, object]:
        return {"position": list(self.position), "direction": self.direction.name}


DEFAULT_ENTRY = Beam(position=(0, -1), direction=Direction.EAST)


def _mirror(mapping: Mapping[Direction, Direction]) -> Dict[Direction, Tuple[Direction, ...]]:
    return {incoming: (outgoing,) for incoming, outgoing in mapping.items()}


def _splitter(vertical: bool) -> Dict[Direction, Tuple[Direction, ...]]:
    split = (
        (Direction.NORTH, Direction.SOUTH)
        if vertical
        else (Direction.EAST, Direction.WEST)
    )
    return {
        direction: (direction,) if direction.is_vertical == vertical else split
        for direction in Direction
    }


ROUTING_TABLE: Dict[CellKind, Dict[Direction, Tuple[Direction, ...]]] = {
    CellKind.EMPTY: {direction: (direction,) for direction in Direction},
    CellKind.FORWARD_MIRROR: _mirror(
        {
            Direction.NORTH: Direction.EAST,
            Direction.EAST: Direction.NORTH,
            Direction.SOUTH: Direction.WEST,
            Direction.WEST: Direction.SOUTH,
        }
    ),
    CellKind.BACKWARD_MIRROR: _mirror(
        {
            Direction.NORTH: Direction.WEST,
            Direction.WEST: Direction.NORTH,
            Direction.SOUTH: Direction.EAST,
            Direction.EAST: Direction.SOUTH,
        }
    ),
    CellKind.VERTICAL_SPLITTER: _splitter(vertical=True),
    CellKind.HORIZONTAL_SPLITTER: _splitter(vertical=False),
}


def route(kind: CellKind, direction: Direction) -> Tuple[Direction, ...]:
    """Outgoing directions for a beam entering a ``kind`` cell heading ``direction``."""

    try:
        return ROUTING_TABLE[kind][direction]
    except KeyError as exc:
        raise RoutingError(f"No routing rule for {kind!r} heading {direction!r}") from exc


def propagate(
    grid: Grid,
    start: Beam,
    tracker: Optional[BeamStateTracker] = None,
) -> BeamStateTracker:
    """Explore every beam spawned by ``start`` and return the filled tracker.

    Beams are processed from a LIFO work list. A state already in the tracker
    is dropped, which bounds the loop by ``4 * height * width`` marks.
    """

    if tracker is None:
        tracker = BeamStateTracker.for_grid(grid)
    beams: List[Beam] = [start]
    processed = 0
    while beams:
        beam = beams.pop()
        processed += 1
        if grid.inside(beam.position):
            if not tracker.mark_visited(beam.position, beam.direction):
                continue
        next_position = beam.next_position()
        if not grid.inside(next_position):
            continue
        for outgoing in route(grid.kind_at(next_position), beam.direction):
            beams.append(Beam(next_position, outgoing))
    logger.debug(
        "Beam from %s %s processed %d heads, %d states recorded",
        start.position,
        start.direction.name,
        processed,
        tracker.visited_count,
    )
    return tracker


def count_energized(grid: Grid, tracker: BeamStateTracker) -> int:
    return sum(1 for position in grid.positions() if tracker.any_visited(position))


def render_energized(
    grid: Grid,
    tracker: BeamStateTracker,
    *,
    lit: str = "#",
    dark: str = ".",
) -> str:
    lines = []
    for row in range(grid.height):
        lines.append(
            "".join(
                lit if tracker.any_visited((row, col)) else dark
                for col in range(grid.width)
            )
        )
    return "\n".join(lines)


class BeamSimulator:
    """Runs beams over one grid and keeps the state of the latest run."""

    def __init__(self, grid: Grid):
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        self.tracker = BeamStateTracker.for_grid(self.grid)
        self.start: Optional[Beam] = None

    def propagate(self, start: Beam = DEFAULT_ENTRY) -> int:
        self.reset()
        self.start = start
        propagate(self.grid, start, self.tracker)
        return self.energized_count()

    def energized_count(self) -> int:
        return count_energized(self.grid, self.tracker)

    def render(self) -> str:
        return render_energized(self.grid, self.tracker)

    def playthrough(self, start: Beam = DEFAULT_ENTRY) -> Dict[str, object]:
        energized = self.propagate(start)
        return {
            "start": start.as_payload(),
            "energized": energized,
            "visited_states": self.tracker.visited_count,
            "metadata": self.grid.metadata,
            "energized_cells": [
                list(position) for position in sorted(self.tracker.energized())
            ],
        }
