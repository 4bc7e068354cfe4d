"""Layout constants for the beam grid viewer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..grid import CellKind

# Tile metrics
TILE_SIZE: int = 32
BOARD_OUTER_PADDING: int = 24
STATUS_HEIGHT: int = 56
STATUS_PADDING: int = 12

# Colors expressed as RGB tuples
BACKGROUND_COLOR: Tuple[int, int, int] = (12, 14, 26)
BOARD_BACKGROUND_COLOR: Tuple[int, int, int] = (24, 24, 30)
GRID_LINE_COLOR: Tuple[int, int, int] = (40, 40, 55)
ENERGIZED_COLOR: Tuple[int, int, int] = (255, 140, 60)
ENTRY_COLOR: Tuple[int, int, int] = (130, 210, 255)
TEXT_COLOR: Tuple[int, int, int] = (232, 236, 244)
STATUS_BACKGROUND_COLOR: Tuple[int, int, int] = (32, 36, 60)

GLYPH_COLORS: Dict[CellKind, Tuple[int, int, int]] = {
    CellKind.FORWARD_MIRROR: (240, 240, 240),
    CellKind.BACKWARD_MIRROR: (240, 240, 240),
    CellKind.VERTICAL_SPLITTER: (140, 255, 180),
    CellKind.HORIZONTAL_SPLITTER: (140, 255, 180),
}


@dataclass(frozen=True)
class BoardGeometry:
    """Pixel rectangles for the major viewer regions."""

    board: Tuple[int, int, int, int]
    status: Tuple[int, int, int, int]
    window: Tuple[int, int]


def compute_geometry(grid_width: int, grid_height: int, tile_size: int = TILE_SIZE) -> BoardGeometry:
    """Compute the board, status strip and window size for a grid."""

    board_width = grid_width * tile_size
    board_height = grid_height * tile_size

    board_x = BOARD_OUTER_PADDING
    board_y = BOARD_OUTER_PADDING

    status_x = board_x
    status_y = board_y + board_height + STATUS_PADDING

    window_width = board_x + board_width + BOARD_OUTER_PADDING
    window_height = status_y + STATUS_HEIGHT + BOARD_OUTER_PADDING

    return BoardGeometry(
        board=(board_x, board_y, board_width, board_height),
        status=(status_x, status_y, board_width, STATUS_HEIGHT),
        window=(window_width, window_height),
    )
