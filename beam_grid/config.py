"""Environment driven configuration for layouts and the entry search."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

GRID_ROOT_ENV_VAR = "BEAM_GRID_ROOT"
WORKERS_ENV_VAR = "BEAM_GRID_WORKERS"
EXECUTOR_ENV_VAR = "BEAM_GRID_EXECUTOR"

EXECUTORS = ("process", "thread", "serial")


@dataclass(frozen=True)
class GridDirectories:
    """Bundle with resolved directories used by the command line tools."""

    grid_root: Path


def _default_grid_root() -> Path:
    return Path(__file__).resolve().parent / "grids"


def _read_directory(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def resolve_directories(check_exists: bool = True) -> GridDirectories:
    """Resolve the layout directory using environment variables.

    Parameters
    ----------
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if the resolved directory
        does not exist on disk.
    """

    grid_root = _read_directory(GRID_ROOT_ENV_VAR, _default_grid_root())

    if check_exists and not grid_root.exists():
        raise FileNotFoundError(f"Grid layout directory does not exist: {grid_root}")

    return GridDirectories(grid_root=grid_root)


@dataclass(frozen=True)
class SearchSettings:
    """How the optimal entry search distributes its runs."""

    workers: Optional[int] = None
    executor: str = "process"

    def __post_init__(self) -> None:
        if self.executor not in EXECUTORS:
            raise ValueError(
                f"Unknown executor '{self.executor}', expected one of {', '.join(EXECUTORS)}."
            )
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"Worker count must be at least 1, got {self.workers}.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SearchSettings":
        environ = os.environ if environ is None else environ
        workers_value = environ.get(WORKERS_ENV_VAR)
        workers: Optional[int] = None
        if workers_value:
            try:
                workers = int(workers_value)
            except ValueError as exc:
                raise ValueError(
                    f"{WORKERS_ENV_VAR} must be an integer, got '{workers_value}'."
                ) from exc
        executor = environ.get(EXECUTOR_ENV_VAR) or "process"
        return cls(workers=workers, executor=executor.lower())
