"""Minimal pygame based board widget.

Rendering is kept deterministic so the widget can be exercised in automated
tests using the SDL ``dummy`` video driver.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

from ..engine import DEFAULT_ENTRY, Beam, BeamSimulator
from ..grid import Direction, Grid, Position
from . import layout


# Pygame is only needed for the viewer. The import happens lazily in
# ``ensure_pygame`` so tests can select the SDL driver first.
_PYGAME = None


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        _PYGAME = __import__("pygame")
        _PYGAME.display.init()
        _PYGAME.font.init()
    return _PYGAME


def entry_for_cell(grid: Grid, position: Position) -> Optional[Beam]:
    """Inward entry beam for an edge cell, or ``None`` for interior cells.

    Corner cells resolve to the vertical edge (top/bottom) entry.
    """

    row, col = position
    if row == 0:
        return Beam((-1, col), Direction.SOUTH)
    if row == grid.height - 1:
        return Beam((grid.height, col), Direction.NORTH)
    if col == 0:
        return Beam((row, -1), Direction.EAST)
    if col == grid.width - 1:
        return Beam((row, grid.width), Direction.WEST)
    return None


class BeamGridUI:
    """Draws a grid with its energized cells for the current entry beam."""

    def __init__(
        self,
        grid: Grid,
        *,
        cell_size: int = layout.TILE_SIZE,
        surface=None,
        use_display: bool = False,
        entry: Beam = DEFAULT_ENTRY,
    ) -> None:
        pygame = ensure_pygame()
        self.grid = grid
        self.cell_size = cell_size
        width = grid.width * cell_size
        height = grid.height * cell_size
        self.surface = surface or pygame.Surface((width, height))
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode((width, height))
        self.simulator = BeamSimulator(grid)
        self.entry = entry
        self.energized = self.simulator.propagate(entry)
        # Default font keeps glyph rasterisation identical across systems.
        self.font = pygame.font.Font(pygame.font.get_default_font(), max(10, cell_size // 2))

    # ------------------------------------------------------------------
    # Input handling
    def select_entry(self, entry: Beam) -> int:
        self.entry = entry
        self.energized = self.simulator.propagate(entry)
        return self.energized

    def process_events(self, events: Iterable[object]) -> None:
        pygame = ensure_pygame()
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

    def _grid_from_pixel(self, pos: Tuple[int, int]) -> Optional[Position]:
        x, y = pos
        position = (y // self.cell_size, x // self.cell_size)
        if not self.grid.inside(position):
            return None
        return position

    def _handle_click(self, pos: Tuple[int, int]) -> None:
        position = self._grid_from_pixel(pos)
        if position is None:
            return
        entry = entry_for_cell(self.grid, position)
        if entry is not None:
            self.select_entry(entry)

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self):
        pygame = ensure_pygame()
        self.surface.fill(layout.BOARD_BACKGROUND_COLOR)
        self._draw_energized()
        self._draw_grid()
        self._draw_glyphs()
        if self.screen:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def cell_rect(self, position: Position):
        pygame = ensure_pygame()
        row, col = position
        return pygame.Rect(
            col * self.cell_size,
            row * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def _draw_grid(self) -> None:
        pygame = ensure_pygame()
        for position in self.grid.positions():
            pygame.draw.rect(self.surface, layout.GRID_LINE_COLOR, self.cell_rect(position), 1)

    def _draw_energized(self) -> None:
        for position in self.simulator.tracker.energized():
            self.surface.fill(layout.ENERGIZED_COLOR, self.cell_rect(position))

    def _draw_glyphs(self) -> None:
        for position in self.grid.positions():
            kind = self.grid.kind_at(position)
            color = layout.GLYPH_COLORS.get(kind)
            if color is None:
                continue
            label = self.font.render(kind.symbol, True, color)
            rect = label.get_rect()
            rect.center = self.cell_rect(position).center
            self.surface.blit(label, rect)


__all__ = ["BeamGridUI", "entry_for_cell", "ensure_pygame"]
