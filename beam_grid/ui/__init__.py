"""Pygame viewer for the beam grid simulator."""

from .main import draw_scene, run, status_text
from .toolkit import BeamGridUI, entry_for_cell

__all__ = [
    "BeamGridUI",
    "draw_scene",
    "entry_for_cell",
    "run",
    "status_text",
]
