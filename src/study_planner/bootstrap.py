# src/study_planner/bootstrap.py

"""
Bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the durable store and the per-mode repo into AppState,
- hydrates the planner before any command is accepted.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .config import get_settings
from .core.ports import Clock, IdFactory, KeyValueStore
from .core.state import AppState
from .logging_setup import level_from_name, setup_logging
from .planner.api import persist
from .planner.codec import LoadStatus, PlannerRepo, storage_key
from .planner.kv_store import SqliteKeyValueStore
from .planner.models import Mode, PlannerState, new_id
from .planner.retention import sweep_state
from .planner.seed import seed_for_mode

logger = logging.getLogger(__name__)


def configure_logging(settings=None) -> None:
    if settings is None:
        settings = get_settings()
    setup_logging(
        log_dir=settings.data_dir,
        console_level=level_from_name(settings.log_level),
        log_to_file=bool(getattr(settings, "log_to_file", True)),
    )


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def hydrate(repo: PlannerRepo, mode: Mode, *, now: datetime) -> PlannerState:
    """
    Build the startup state.

    - stored blob decodes       -> use it
    - nothing stored / corrupt  -> seed for the mode (demo data or default subjects)
    Either way the result is swept for expired completed tasks.
    """
    result = repo.load(now=now)
    if result.status == LoadStatus.LOADED and result.state is not None:
        planner = result.state
    else:
        if result.status == LoadStatus.CORRUPT:
            logger.warning("Saved planner data unusable (%s); starting from seed.", result.error)
        planner = seed_for_mode(mode, now.date())
        logger.info("Seeded planner mode=%s", mode.value)
    return sweep_state(planner, now)


def create_initial_state(
    *,
    settings=None,
    mode: Mode | str | None = None,
    store: KeyValueStore | None = None,
    clock: Clock | None = None,
    id_factory: IdFactory | None = None,
) -> AppState:
    """
    Create a hydrated AppState.

    Keeping settings/store/clock injectable makes the app easier to test and avoids hidden global reads.
    If settings is None, falls back to get_settings(); if store is None, opens SQLite at settings.db_path.
    """
    if settings is None:
        settings = get_settings()
    if mode is None:
        mode = getattr(settings, "mode", Mode.APP)
    mode = Mode.from_raw(str(mode))
    clock = clock or datetime.now

    if store is None:
        _ensure_local_dirs(settings)
        store = SqliteKeyValueStore(settings.db_path)

    repo = PlannerRepo(store, storage_key(settings.storage_key_prefix, mode))

    state = AppState(
        settings=settings,
        mode=mode,
        repo=repo,
        clock=clock,
        id_factory=id_factory or new_id,
    )
    state.planner = hydrate(repo, mode, now=clock())
    persist(state)

    logger.info(
        "Planner ready mode=%s key=%s subjects=%d tasks=%d sessions=%d",
        mode.value,
        repo.key,
        len(state.planner.subjects),
        len(state.planner.tasks),
        len(state.planner.study_sessions),
    )
    return state
