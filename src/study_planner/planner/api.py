# src/study_planner/planner/api.py

"""
Commands the view layer calls in response to user actions.

Each command applies one reducer transition to state.planner. When the state
actually changed it then runs the retention sweep and persists the result;
a declined command (invalid input, unknown id) touches nothing.

Add commands return the new entity id, or None when declined.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from . import reducer
from .models import PlannerState, SessionDraft, TaskDraft
from .retention import sweep_state

logger = logging.getLogger(__name__)


def _commit(state: AppState, transition: Callable[[PlannerState], PlannerState]) -> bool:
    before = state.planner
    after = transition(before)
    if after is before:
        return False
    state.planner = sweep_state(after, state.clock())
    persist(state)
    return True


def persist(state: AppState) -> bool:
    """Write the current planner; a failed write is logged and otherwise ignored."""
    ok = state.repo.save(state.planner)
    if ok:
        state.saves += 1
    else:
        state.failed_saves += 1
        logger.warning("Planner changes are kept in memory only (save failed).")
    return ok


def refresh(state: AppState) -> bool:
    """
    Re-run the retention sweep against the current time.

    Saves only when something expired. Returns True in that case.
    """
    swept = sweep_state(state.planner, state.clock())
    if swept is state.planner:
        return False
    state.planner = swept
    persist(state)
    return True


# ---- subjects ----


def add_subject(state: AppState, name: str, color: str) -> str | None:
    entity_id = state.id_factory()
    if not _commit(state, lambda p: reducer.add_subject(p, name, color, entity_id=entity_id)):
        return None
    logger.info("Subject added id=%s name=%s", entity_id, name.strip())
    return entity_id


def update_subject(state: AppState, subject_id: str, name: str, color: str) -> bool:
    return _commit(state, lambda p: reducer.update_subject(p, subject_id, name, color))


def delete_subject(state: AppState, subject_id: str) -> bool:
    changed = _commit(state, lambda p: reducer.delete_subject(p, subject_id))
    if changed:
        logger.info("Subject deleted id=%s (with its tasks and sessions)", subject_id)
    return changed


# ---- tasks ----


def add_task(state: AppState, draft: TaskDraft) -> str | None:
    entity_id = state.id_factory()
    if not _commit(state, lambda p: reducer.add_task(p, draft, entity_id=entity_id)):
        return None
    logger.debug("Task added id=%s type=%s due=%s", entity_id, draft.type, draft.due_date)
    return entity_id


def update_task(state: AppState, task_id: str, draft: TaskDraft) -> bool:
    return _commit(state, lambda p: reducer.update_task(p, task_id, draft))


def delete_task(state: AppState, task_id: str) -> bool:
    return _commit(state, lambda p: reducer.delete_task(p, task_id))


def toggle_task_completed(state: AppState, task_id: str) -> bool:
    now = state.clock()
    return _commit(state, lambda p: reducer.toggle_task_completed(p, task_id, now=now))


# ---- study sessions ----


def add_study_session(state: AppState, draft: SessionDraft) -> str | None:
    entity_id = state.id_factory()
    if not _commit(state, lambda p: reducer.add_study_session(p, draft, entity_id=entity_id)):
        return None
    logger.debug("Study session added id=%s subject_id=%s", entity_id, draft.subject_id)
    return entity_id


def update_study_session(state: AppState, session_id: str, draft: SessionDraft) -> bool:
    return _commit(state, lambda p: reducer.update_study_session(p, session_id, draft))


def delete_study_session(state: AppState, session_id: str) -> bool:
    return _commit(state, lambda p: reducer.delete_study_session(p, session_id))


def toggle_session_completed(state: AppState, session_id: str) -> bool:
    now = state.clock()
    return _commit(state, lambda p: reducer.toggle_session_completed(p, session_id, now=now))
