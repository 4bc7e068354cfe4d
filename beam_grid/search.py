"""Search every edge entry for the beam that energizes the most cells."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional

from .config import SearchSettings
from .engine import Beam, count_energized, propagate
from .grid import Direction, Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    best: Beam
    energized: int
    evaluated: int


def entry_beams(grid: Grid) -> List[Beam]:
    """All ``2 * (width + height)`` beams entering from one step outside an edge."""

    beams: List[Beam] = []
    for col in range(grid.width):
        beams.append(Beam((-1, col), Direction.SOUTH))
        beams.append(Beam((grid.height, col), Direction.NORTH))
    for row in range(grid.height):
        beams.append(Beam((row, -1), Direction.EAST))
        beams.append(Beam((row, grid.width), Direction.WEST))
    return beams


def evaluate_entry(grid: Grid, start: Beam) -> int:
    # Each call owns a fresh tracker so runs never share visited state.
    return count_energized(grid, propagate(grid, start))


def _resolve_workers(workers: Optional[int], tasks: int) -> int:
    if workers is None:
        cpu = os.cpu_count() or 1
        workers = max(1, min(cpu, 8))
    return max(1, min(int(workers), tasks))


def _make_executor(kind: str, workers: int) -> Executor:
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    return ProcessPoolExecutor(max_workers=workers)


def find_best_entry(
    grid: Grid,
    settings: Optional[SearchSettings] = None,
) -> SearchResult:
    """Run every entry beam independently and keep the largest coverage.

    Ties go to the earliest beam in :func:`entry_beams` order, regardless of
    which worker finishes first.
    """

    settings = settings or SearchSettings()
    candidates = entry_beams(grid)
    workers = _resolve_workers(settings.workers, len(candidates))
    scores: List[int] = [0] * len(candidates)

    if settings.executor == "serial" or workers == 1:
        for index, start in enumerate(candidates):
            scores[index] = evaluate_entry(grid, start)
    else:
        logger.info(
            "Evaluating %d entries on %d %s workers",
            len(candidates),
            workers,
            settings.executor,
        )
        total = len(candidates)
        done = 0
        with _make_executor(settings.executor, workers) as pool:
            futures = {
                pool.submit(evaluate_entry, grid, start): index
                for index, start in enumerate(candidates)
            }
            for future in as_completed(futures):
                scores[futures[future]] = future.result()
                done += 1
                if done % max(1, total // 10) == 0 or done == total:
                    logger.debug("%d/%d entries evaluated", done, total)

    best_index = max(range(len(candidates)), key=lambda index: (scores[index], -index))
    result = SearchResult(
        best=candidates[best_index],
        energized=scores[best_index],
        evaluated=len(candidates),
    )
    logger.info(
        "Best entry %s heading %s energizes %d cells",
        result.best.position,
        result.best.direction.name,
        result.energized,
    )
    return result


def max_energized(grid: Grid, settings: Optional[SearchSettings] = None) -> int:
    return find_best_entry(grid, settings).energized
