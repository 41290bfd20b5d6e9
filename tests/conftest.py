# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from study_planner.bootstrap import create_initial_state
from study_planner.core.state import AppState

from .fakes import FakeClock, InMemoryKeyValueStore, SequentialIds

START = datetime(2026, 3, 10, 9, 0, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="study-planner-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path,
        db_path=tmp_path / "planner.sqlite3",
        storage_key_prefix="test-planner",
        mode="app",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(START)


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def app(settings: SimpleNamespace, kv: InMemoryKeyValueStore, clock: FakeClock) -> AppState:
    """
    AppState hydrated from an empty in-memory store (app mode -> default subjects).

    NOTE: the real SQLite store is covered separately in test_kv_store.py.
    """
    return create_initial_state(settings=settings, store=kv, clock=clock, id_factory=SequentialIds())
