import json
import logging
from pathlib import Path

import pytest

from beam_grid.config import (
    EXECUTOR_ENV_VAR,
    GRID_ROOT_ENV_VAR,
    WORKERS_ENV_VAR,
    GridDirectories,
    SearchSettings,
    resolve_directories,
)
from beam_grid.demo import benchmark, main
from beam_grid.logging_config import setup_logging


def test_resolve_directories_returns_package_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(GRID_ROOT_ENV_VAR, raising=False)
    directories = resolve_directories()

    assert isinstance(directories, GridDirectories)
    assert directories.grid_root.exists()
    assert (directories.grid_root / "contraption.txt").exists()


def test_resolve_directories_honours_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(GRID_ROOT_ENV_VAR, str(tmp_path))

    assert resolve_directories().grid_root == tmp_path


def test_resolve_directories_errors_on_missing_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(GRID_ROOT_ENV_VAR, str(tmp_path / "missing"))

    with pytest.raises(FileNotFoundError):
        resolve_directories()
    assert resolve_directories(check_exists=False).grid_root == tmp_path / "missing"


def test_search_settings_from_environment():
    settings = SearchSettings.from_env({WORKERS_ENV_VAR: "3", EXECUTOR_ENV_VAR: "Thread"})

    assert settings == SearchSettings(workers=3, executor="thread")
    assert SearchSettings.from_env({}) == SearchSettings()


@pytest.mark.parametrize(
    "environ",
    [{WORKERS_ENV_VAR: "many"}, {WORKERS_ENV_VAR: "0"}, {EXECUTOR_ENV_VAR: "gpu"}],
)
def test_search_settings_reject_bad_values(environ):
    with pytest.raises(ValueError):
        SearchSettings.from_env(environ)


def test_benchmark_requires_repetitions():
    with pytest.raises(ValueError):
        benchmark(lambda: None, 0)

    average, minimum, maximum = benchmark(lambda: None, 3)
    assert minimum <= average <= maximum


def test_cli_lists_grids(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["--list-grids"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Available grids" in output
    assert "contraption" in output


def test_cli_default_entry(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["contraption"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Energized cells: 46" in output


def test_cli_best_entry(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["contraption", "--best", "--executor", "serial"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "40 entries evaluated" in output
    assert "Energized cells: 51" in output


def test_cli_reads_layout_file_and_shows_map(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    layout = tmp_path / "column.txt"
    layout.write_text("...\n...\n...\n")

    exit_code = main([str(layout), "--row", "-1", "--col", "0", "--direction", "south", "--show"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Energized cells: 3" in output
    assert "#..\n#..\n#.." in output


def test_cli_json_summary(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["contraption", "--json"])
    lines = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    summary = json.loads("\n".join(lines[1:]))
    assert summary["energized"] == 46
    assert summary["start"]["direction"] == "EAST"


def test_cli_benchmark(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["ring", "--benchmark", "2"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Avg Duration" in output
    assert "Max Duration" in output


def test_cli_rejects_malformed_layout(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    layout = tmp_path / "broken.txt"
    layout.write_text("..#\n...\n")

    exit_code = main([str(layout)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "error:" in captured.err
    assert "column 2" in captured.err


def test_cli_rejects_unknown_layout(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["no_such_layout"])

    assert exit_code == 1
    assert "error:" in capsys.readouterr().err


def test_cli_rejects_negative_benchmark(capsys: pytest.CaptureFixture[str]):
    exit_code = main(["ring", "--benchmark", "-1"])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "--benchmark must not be negative" in captured.err
    assert "Energized cells" not in captured.out


def test_single_run_ignores_search_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
):
    monkeypatch.setenv(WORKERS_ENV_VAR, "many")

    assert main(["ring"]) == 0
    assert "Energized cells: 1" in capsys.readouterr().out

    assert main(["ring", "--best"]) == 1
    assert WORKERS_ENV_VAR in capsys.readouterr().err


def test_setup_logging_replaces_handlers(tmp_path: Path):
    log_file = tmp_path / "run.log"

    setup_logging(logging.DEBUG, str(log_file))
    logger = setup_logging(logging.INFO, str(log_file))

    assert logger.name == "beam_grid"
    assert len(logger.handlers) == 2
    logging.getLogger("beam_grid.engine").info("run finished")
    for handler in logger.handlers:
        handler.flush()
    assert "beam_grid.engine - INFO - run finished" in log_file.read_text(encoding="utf-8")
    setup_logging(logging.WARNING)
