# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from study_planner.bootstrap import configure_logging
from study_planner.logging_setup import LOG_FILE_NAME, _ConsoleNoiseFilter, level_from_name, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_drops_library_noise() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("study_planner.planner.api", logging.DEBUG))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("py.warnings", logging.ERROR))


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    log_file = setup_logging(log_dir=tmp_path, console_level=logging.WARNING)
    assert log_file == tmp_path / LOG_FILE_NAME

    logging.getLogger("study_planner.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "hello file" in log_file.read_text("utf-8")


def test_setup_logging_without_file(tmp_path: Path, restore_root_logging) -> None:
    assert setup_logging(log_dir=tmp_path / "logs", log_to_file=False) is None
    assert not (tmp_path / "logs").exists()


def test_level_from_name() -> None:
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name("nonsense") == logging.INFO
    assert level_from_name(None, logging.WARNING) == logging.WARNING


def test_configure_logging_from_settings(settings, restore_root_logging) -> None:
    configure_logging(settings)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].level == logging.DEBUG
