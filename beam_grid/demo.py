"""Command line front end for the beam grid simulator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from .config import EXECUTORS, SearchSettings, resolve_directories
from .engine import DEFAULT_ENTRY, Beam, BeamSimulator
from .errors import MalformedInputError
from .grid import Direction, Grid, GridLoader, load_grid_file
from .logging_config import setup_logging
from .search import find_best_entry

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = "contraption"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Beam grid simulator")
    parser.add_argument(
        "layout",
        nargs="?",
        default=DEFAULT_LAYOUT,
        help="Path to a layout file, or the name of a layout in the grid directory.",
    )
    parser.add_argument("--row", type=int, default=DEFAULT_ENTRY.position[0])
    parser.add_argument("--col", type=int, default=DEFAULT_ENTRY.position[1])
    parser.add_argument(
        "--direction",
        default=DEFAULT_ENTRY.direction.name,
        help="Heading of the entry beam (north, east, south, west).",
    )
    parser.add_argument(
        "--best",
        action="store_true",
        help="Search every edge entry and report the largest coverage.",
    )
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--executor", choices=EXECUTORS, default=None)
    parser.add_argument("--show", action="store_true", help="Print the energized map.")
    parser.add_argument("--json", action="store_true", help="Print the run summary as JSON.")
    parser.add_argument("--list-grids", action="store_true", help="List packaged layouts and exit.")
    parser.add_argument(
        "--benchmark",
        type=int,
        default=0,
        metavar="N",
        help="Repeat the computation N times and print timing statistics.",
    )
    parser.add_argument("--view", action="store_true", help="Open the pygame viewer.")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--log-file", default=None)
    return parser


def load_layout(value: str, loader: GridLoader) -> Grid:
    path = Path(value)
    if path.is_file():
        return load_grid_file(path)
    return loader.load(value)


def benchmark(code: Callable[[], object], repetitions: int) -> Tuple[float, float, float]:
    """Run ``code`` repeatedly and return (average, minimum, maximum) in µs."""

    if repetitions <= 0:
        raise ValueError("Number of iterations must be greater than zero.")
    durations: List[float] = []
    for _ in range(repetitions):
        start = time.perf_counter()
        code()
        durations.append((time.perf_counter() - start) * 1_000_000)
    return sum(durations) / repetitions, min(durations), max(durations)


def _settings_from_args(args: argparse.Namespace) -> SearchSettings:
    # Environment overrides are only read when a search can actually run.
    defaults = SearchSettings.from_env()
    return SearchSettings(
        workers=args.workers if args.workers is not None else defaults.workers,
        executor=args.executor or defaults.executor,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        directories = resolve_directories()
        loader = GridLoader(directories.grid_root)
        if args.list_grids:
            print(f"Available grids in {loader.root}:")
            for name in loader.names():
                print(f"  {name}")
            return 0
        grid = load_layout(args.layout, loader)
        entry = Beam((args.row, args.col), Direction.from_name(args.direction))
        if args.benchmark < 0:
            raise ValueError(f"--benchmark must not be negative, got {args.benchmark}.")
        settings = _settings_from_args(args) if args.best or args.view else None
    except (FileNotFoundError, MalformedInputError, ValueError) as exc:
        logger.error("Cannot start simulation: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    simulator = BeamSimulator(grid)
    if args.best:
        result = find_best_entry(grid, settings)
        entry = result.best
        print(
            f"Best entry: {list(entry.position)} heading {entry.direction.name} "
            f"({result.evaluated} entries evaluated)"
        )
        print(f"Energized cells: {result.energized}")
        if args.benchmark:
            stats = benchmark(lambda: find_best_entry(grid, settings), args.benchmark)
            _print_benchmark(stats)
    else:
        energized = simulator.propagate(entry)
        print(f"Energized cells: {energized}")
        if args.benchmark:
            stats = benchmark(lambda: BeamSimulator(grid).propagate(entry), args.benchmark)
            _print_benchmark(stats)

    if args.show or args.json:
        summary = simulator.playthrough(entry)
        if args.show:
            print(simulator.render())
        if args.json:
            print(json.dumps(summary, indent=2))

    if args.view:
        from .ui.main import run

        run(grid, entry=entry, settings=settings)
    return 0


def _print_benchmark(stats: Tuple[float, float, float]) -> None:
    average, minimum, maximum = stats
    print(f"Avg Duration: {average:.1f} µs")
    print(f"Min Duration: {minimum:.0f} µs")
    print(f"Max Duration: {maximum:.0f} µs")


if __name__ == "__main__":
    sys.exit(main())
