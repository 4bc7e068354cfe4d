"""Board model: directions, cell kinds and the immutable grid."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple

from .errors import MalformedInputError, OutOfRangeError


Position = Tuple[int, int]


class Direction(Enum):
    """Cardinal directions for a beam, as (row, column) steps."""

    NORTH = (-1, 0)
    EAST = (0, 1)
    SOUTH = (1, 0)
    WEST = (0, -1)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @property
    def bit(self) -> int:
        return _DIRECTION_BITS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.NORTH, Direction.SOUTH)

    @staticmethod
    def from_name(name: str) -> "Direction":
        name = name.upper()
        try:
            return Direction[name]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {name}") from exc

    def step(self, position: Position) -> Position:
        return position[0] + self.value[0], position[1] + self.value[1]


_DIRECTION_BITS: Dict[Direction, int] = {
    direction: 1 << index for index, direction in enumerate(Direction)
}


class CellKind(Enum):
    """Routing behaviour of a single cell, keyed by its layout character."""

    EMPTY = "."
    VERTICAL_SPLITTER = "|"
    HORIZONTAL_SPLITTER = "-"
    FORWARD_MIRROR = "/"
    BACKWARD_MIRROR = "\\"

    @property
    def symbol(self) -> str:
        return self.value

    @staticmethod
    def from_symbol(symbol: str) -> "CellKind":
        try:
            return CellKind(symbol)
        except ValueError as exc:
            raise MalformedInputError(f"Unknown cell symbol: {symbol!r}") from exc


@dataclass(frozen=True)
class Grid:
    """Fixed-size rectangular board of cell kinds.

    Rows are indexed ``[0, height)`` and columns ``[0, width)``. The layout is
    never mutated after construction, so one instance can back any number of
    simulations, including ones running in other processes.
    """

    rows: Tuple[Tuple[CellKind, ...], ...]

    def __post_init__(self) -> None:
        if not self.rows or not self.rows[0]:
            raise MalformedInputError("Grid layout is empty.")
        width = len(self.rows[0])
        for row_index, row in enumerate(self.rows):
            if len(row) != width:
                raise MalformedInputError(
                    f"Row {row_index} has width {len(row)}, expected {width}."
                )

    @classmethod
    def from_text(cls, text: str) -> "Grid":
        # Only trailing blank lines are dropped; every other character counts.
        lines = text.splitlines()
        while lines and lines[-1] == "":
            lines.pop()
        return cls.from_rows(lines)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        if not rows or not any(rows):
            raise MalformedInputError("Grid layout is empty.")
        width = len(rows[0])
        parsed: List[Tuple[CellKind, ...]] = []
        for row_index, line in enumerate(rows):
            if len(line) != width:
                raise MalformedInputError(
                    f"Row {row_index} has width {len(line)}, expected {width}."
                )
            cells = []
            for col_index, symbol in enumerate(line):
                try:
                    cells.append(CellKind.from_symbol(symbol))
                except MalformedInputError as exc:
                    raise MalformedInputError(
                        f"Unknown cell symbol {symbol!r} at row {row_index}, column {col_index}."
                    ) from exc
            parsed.append(tuple(cells))
        return cls(rows=tuple(parsed))

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def metadata(self) -> Dict[str, object]:
        return {
            "dimensions": f"{self.width}x{self.height}",
            "width": self.width,
            "height": self.height,
        }

    def inside(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.height and 0 <= col < self.width

    def kind_at(self, position: Position) -> CellKind:
        if not self.inside(position):
            raise OutOfRangeError(
                f"Position {position} is outside the {self.height}x{self.width} grid."
            )
        row, col = position
        return self.rows[row][col]

    def positions(self) -> Iterator[Position]:
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    def to_text(self) -> str:
        return "\n".join("".join(kind.symbol for kind in row) for row in self.rows)


class GridLoader:
    """Load grid layouts stored as plain text files."""

    suffix = ".txt"

    def __init__(self, root: Path):
        self.root = Path(root)

    def names(self) -> List[str]:
        return sorted(path.stem for path in self.root.glob(f"*{self.suffix}"))

    def load(self, name: str) -> Grid:
        path = self.root / f"{name}{self.suffix}"
        if not path.exists():
            raise FileNotFoundError(path)
        return load_grid_file(path)


def load_grid_file(path: Path) -> Grid:
    return Grid.from_text(Path(path).read_text(encoding="utf-8"))
