"""Headless tests for the pygame board widget and scene drawing.

The fixtures in ``conftest.py`` force the SDL dummy drivers. A fixed
``cell_size`` keeps pixel coordinates predictable.
"""

from __future__ import annotations

from pathlib import Path

from beam_grid.engine import Beam
from beam_grid.grid import Direction, Grid, GridLoader
from beam_grid.ui import BeamGridUI, draw_scene, entry_for_cell, status_text
from beam_grid.ui import layout

CELL = 32


def contraption() -> Grid:
    return GridLoader(Path(__file__).resolve().parents[2] / "grids").load("contraption")


def make_ui(pygame, grid: Grid) -> BeamGridUI:
    return BeamGridUI(
        grid,
        cell_size=CELL,
        surface=pygame.Surface((grid.width * CELL, grid.height * CELL)),
    )


def pixel(surface, position, offset: int = 3):
    row, col = position
    return tuple(surface.get_at((col * CELL + offset, row * CELL + offset)))[:3]


def click(pygame, position):
    row, col = position
    return pygame.event.Event(
        pygame.MOUSEBUTTONDOWN,
        button=1,
        pos=(col * CELL + CELL // 2, row * CELL + CELL // 2),
    )


def test_energized_cells_are_highlighted(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, contraption())
    rendered = ui.render()

    assert ui.energized == 46
    assert pixel(rendered, (0, 0)) == layout.ENERGIZED_COLOR
    assert pixel(rendered, (0, 9)) == layout.BOARD_BACKGROUND_COLOR


def test_clicking_top_edge_fires_southward(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, contraption())

    ui.process_events([click(pygame, (0, 3))])

    assert ui.entry == Beam((-1, 3), Direction.SOUTH)
    assert ui.energized == 51


def test_clicking_interior_cell_keeps_entry(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, contraption())
    before = ui.entry

    ui.process_events([click(pygame, (5, 5))])

    assert ui.entry == before
    assert ui.energized == 46


def test_entry_for_cell_resolves_edges():
    grid = Grid.from_rows(["...", "...", "..."])

    assert entry_for_cell(grid, (0, 0)) == Beam((-1, 0), Direction.SOUTH)
    assert entry_for_cell(grid, (2, 1)) == Beam((3, 1), Direction.NORTH)
    assert entry_for_cell(grid, (1, 0)) == Beam((1, -1), Direction.EAST)
    assert entry_for_cell(grid, (1, 2)) == Beam((1, 3), Direction.WEST)
    assert entry_for_cell(grid, (1, 1)) is None


def test_draw_scene_composes_board_and_status(pygame_module):
    pygame = pygame_module
    grid = contraption()
    geometry = layout.compute_geometry(grid.width, grid.height, tile_size=CELL)
    surface = pygame.Surface(geometry.window)
    ui = make_ui(pygame, grid)

    draw_scene(surface, ui, geometry, pygame.font.Font(None, 20))

    board_x, board_y = geometry.board[0], geometry.board[1]
    assert tuple(surface.get_at((board_x + 3, board_y + 3)))[:3] == layout.ENERGIZED_COLOR
    assert tuple(surface.get_at((1, 1)))[:3] == layout.BACKGROUND_COLOR
    assert status_text(ui) == "Entry (0, -1) heading EAST  |  Energized: 46"


def test_compute_geometry_stacks_status_below_board():
    geometry = layout.compute_geometry(10, 5, tile_size=20)

    board_x, board_y, board_w, board_h = geometry.board
    status_x, status_y, status_w, status_h = geometry.status
    assert (board_w, board_h) == (200, 100)
    assert status_y > board_y + board_h
    assert status_w == board_w
    assert geometry.window[0] == board_x + board_w + layout.BOARD_OUTER_PADDING
