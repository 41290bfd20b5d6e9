# planner/retention.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta

from .models import PlannerState, Task

logger = logging.getLogger(__name__)

RETENTION_WINDOW = timedelta(hours=24)


def is_expired(task: Task, now: datetime, window: timedelta = RETENTION_WINDOW) -> bool:
    if not task.completed or task.completed_at is None:
        return False
    return now - task.completed_at > window


def sweep(tasks: Iterable[Task], now: datetime, window: timedelta = RETENTION_WINDOW) -> tuple[Task, ...]:
    """
    Drop tasks completed more than `window` ago.

    Hard delete: there is no archive. Sessions linked to a swept task keep their
    linked_task_id (views treat it as a missing task).
    """
    return tuple(t for t in tasks if not is_expired(t, now, window))


def sweep_state(state: PlannerState, now: datetime, window: timedelta = RETENTION_WINDOW) -> PlannerState:
    """Apply sweep() to a PlannerState; returns the same object when nothing expired."""
    kept = sweep(state.tasks, now, window)
    if len(kept) == len(state.tasks):
        return state
    logger.info("Retention sweep removed %d completed task(s)", len(state.tasks) - len(kept))
    return replace(state, tasks=kept)
