"""Interactive viewer for beam grid layouts."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from ..config import SearchSettings, resolve_directories
from ..engine import DEFAULT_ENTRY, Beam
from ..grid import Grid, GridLoader
from ..search import find_best_entry
from . import layout
from .toolkit import BeamGridUI, ensure_pygame


def status_text(ui: BeamGridUI) -> str:
    row, col = ui.entry.position
    return (
        f"Entry ({row}, {col}) heading {ui.entry.direction.name}"
        f"  |  Energized: {ui.energized}"
    )


def draw_scene(surface, ui: BeamGridUI, geometry: layout.BoardGeometry, font) -> None:
    """Draw the board and the status strip onto ``surface``."""

    pygame = ensure_pygame()
    surface.fill(layout.BACKGROUND_COLOR)

    board_rect = pygame.Rect(*geometry.board)
    status_rect = pygame.Rect(*geometry.status)

    surface.blit(ui.render(), board_rect.topleft)

    pygame.draw.rect(surface, layout.STATUS_BACKGROUND_COLOR, status_rect, border_radius=8)
    text_surface = font.render(status_text(ui), True, layout.TEXT_COLOR)
    text_rect = text_surface.get_rect()
    text_rect.midleft = (status_rect.x + layout.STATUS_PADDING, status_rect.centery)
    surface.blit(text_surface, text_rect)


def run(
    grid: Grid,
    *,
    entry: Beam = DEFAULT_ENTRY,
    settings: Optional[SearchSettings] = None,
) -> None:
    """Open a window for ``grid``; click an edge cell to fire from that edge.

    ``B`` jumps to the best entry, ``Escape`` closes the window.
    """

    pygame = ensure_pygame()
    pygame.init()
    geometry = layout.compute_geometry(grid.width, grid.height)
    screen = pygame.display.set_mode(geometry.window)
    pygame.display.set_caption("Beam Grid")

    ui = BeamGridUI(grid, entry=entry)
    font = pygame.font.Font(None, 24)
    board_x, board_y = geometry.board[0], geometry.board[1]

    clock = pygame.time.Clock()
    running = True
    while running:
        board_events = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_b:
                ui.select_entry(find_best_entry(grid, settings).best)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Translate window coordinates to board coordinates.
                board_events.append(
                    pygame.event.Event(
                        pygame.MOUSEBUTTONDOWN,
                        button=event.button,
                        pos=(event.pos[0] - board_x, event.pos[1] - board_y),
                    )
                )
        ui.process_events(board_events)

        draw_scene(screen, ui, geometry, font)
        pygame.display.flip()
        clock.tick(30)

    pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Beam grid viewer")
    parser.add_argument("layout", nargs="?", default="contraption")
    args = parser.parse_args(argv)

    directories = resolve_directories()
    grid = GridLoader(directories.grid_root).load(args.layout)
    run(grid)


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    main()
