"""Per-run record of which (position, direction) states a beam has crossed."""

from __future__ import annotations

from typing import List, Set

from .errors import OutOfRangeError
from .grid import Direction, Grid, Position


class BeamStateTracker:
    """Visited-direction bitmask for every cell of one simulation run.

    Each cell holds a four bit mask, one bit per :class:`Direction`. A tracker
    belongs to exactly one run; use :meth:`reset` or :meth:`copy` to get a
    pristine or independent instance for the next run.
    """

    def __init__(self, height: int, width: int):
        if height <= 0 or width <= 0:
            raise ValueError(f"Tracker dimensions must be positive, got {height}x{width}.")
        self.height = height
        self.width = width
        self._cells: List[int] = [0] * (height * width)
        self._count = 0

    @classmethod
    def for_grid(cls, grid: Grid) -> "BeamStateTracker":
        return cls(grid.height, grid.width)

    def _index(self, position: Position) -> int:
        row, col = position
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise OutOfRangeError(
                f"Position {position} is outside the {self.height}x{self.width} tracker."
            )
        return row * self.width + col

    def has_visited(self, position: Position, direction: Direction) -> bool:
        return bool(self._cells[self._index(position)] & direction.bit)

    def mark_visited(self, position: Position, direction: Direction) -> bool:
        """Record the state; return ``True`` only when it was not seen before."""

        index = self._index(position)
        mask = self._cells[index]
        if mask & direction.bit:
            return False
        self._cells[index] = mask | direction.bit
        self._count += 1
        return True

    def any_visited(self, position: Position) -> bool:
        return self._cells[self._index(position)] != 0

    def visited_directions(self, position: Position) -> Set[Direction]:
        mask = self._cells[self._index(position)]
        return {direction for direction in Direction if mask & direction.bit}

    @property
    def visited_count(self) -> int:
        return self._count

    def energized(self) -> Set[Position]:
        return {
            divmod(index, self.width)
            for index, mask in enumerate(self._cells)
            if mask
        }

    def reset(self) -> None:
        self._cells = [0] * (self.height * self.width)
        self._count = 0

    def copy(self) -> "BeamStateTracker":
        clone = BeamStateTracker(self.height, self.width)
        clone._cells = list(self._cells)
        clone._count = self._count
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BeamStateTracker):
            return NotImplemented
        return (
            self.height == other.height
            and self.width == other.width
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return (
            f"BeamStateTracker(height={self.height}, width={self.width}, "
            f"visited={self._count})"
        )
