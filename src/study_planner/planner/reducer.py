# planner/reducer.py

"""
Planner state transitions.

Every function takes a PlannerState and returns the next one. Input comes from
user forms, so invalid input is declined by returning the *same* state object
(callers compare with `is` to detect a no-op) rather than raising.

Referential integrity:
- deleting a subject deletes its tasks and study sessions
- deleting a task unlinks (does not delete) sessions that reference it
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime

from .models import (
    PlannerState,
    SessionDraft,
    StudySession,
    Subject,
    Task,
    TaskDraft,
    TaskType,
    normalize_session_title,
)

logger = logging.getLogger(__name__)


def _blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def _task_type(raw: TaskType | str) -> TaskType | None:
    try:
        return TaskType(raw)
    except ValueError:
        return None


# ---- subjects ----


def add_subject(state: PlannerState, name: str, color: str, *, entity_id: str) -> PlannerState:
    if _blank(name) or not entity_id:
        logger.debug("add_subject declined name=%r", name)
        return state
    subject = Subject(id=entity_id, name=name.strip(), color=(color or "").strip())
    return replace(state, subjects=(*state.subjects, subject))


def update_subject(state: PlannerState, subject_id: str, name: str, color: str) -> PlannerState:
    if _blank(name) or state.subject(subject_id) is None:
        logger.debug("update_subject declined id=%s", subject_id)
        return state
    subjects = tuple(
        replace(s, name=name.strip(), color=(color or "").strip()) if s.id == subject_id else s
        for s in state.subjects
    )
    return replace(state, subjects=subjects)


def delete_subject(state: PlannerState, subject_id: str) -> PlannerState:
    if state.subject(subject_id) is None:
        return state
    return PlannerState(
        subjects=tuple(s for s in state.subjects if s.id != subject_id),
        tasks=tuple(t for t in state.tasks if t.subject_id != subject_id),
        study_sessions=tuple(s for s in state.study_sessions if s.subject_id != subject_id),
    )


# ---- tasks ----


def _valid_task_draft(state: PlannerState, draft: TaskDraft) -> TaskType | None:
    if _blank(draft.title) or not isinstance(draft.due_date, date):
        return None
    if state.subject(draft.subject_id) is None:
        return None
    return _task_type(draft.type)


def add_task(state: PlannerState, draft: TaskDraft, *, entity_id: str) -> PlannerState:
    task_type = _valid_task_draft(state, draft)
    if task_type is None or not entity_id:
        logger.debug("add_task declined title=%r subject_id=%s", draft.title, draft.subject_id)
        return state
    task = Task(
        id=entity_id,
        title=draft.title.strip(),
        subject_id=draft.subject_id,
        due_date=_as_date(draft.due_date),
        type=task_type,
    )
    return replace(state, tasks=(*state.tasks, task))


def update_task(state: PlannerState, task_id: str, draft: TaskDraft) -> PlannerState:
    task_type = _valid_task_draft(state, draft)
    if task_type is None or state.task(task_id) is None:
        logger.debug("update_task declined id=%s", task_id)
        return state
    tasks = tuple(
        replace(
            t,
            title=draft.title.strip(),
            subject_id=draft.subject_id,
            due_date=_as_date(draft.due_date),
            type=task_type,
        )
        if t.id == task_id
        else t
        for t in state.tasks
    )
    return replace(state, tasks=tasks)


def delete_task(state: PlannerState, task_id: str) -> PlannerState:
    if state.task(task_id) is None:
        return state
    return replace(
        state,
        tasks=tuple(t for t in state.tasks if t.id != task_id),
        study_sessions=tuple(
            replace(s, linked_task_id=None) if s.linked_task_id == task_id else s
            for s in state.study_sessions
        ),
    )


def toggle_task_completed(state: PlannerState, task_id: str, *, now: datetime) -> PlannerState:
    if state.task(task_id) is None:
        return state
    tasks = tuple(_toggled(t, now) if t.id == task_id else t for t in state.tasks)
    return replace(state, tasks=tasks)


# ---- study sessions ----


def _valid_session_draft(state: PlannerState, draft: SessionDraft) -> bool:
    if state.subject(draft.subject_id) is None:
        return False
    if not isinstance(draft.date, date):
        return False
    return not (_blank(draft.start_time) or _blank(draft.duration))


def _linked_task_id(state: PlannerState, raw: str | None) -> str | None:
    # Dangling links are dropped; the assessment-type rule is left to the form.
    if not raw:
        return None
    return raw if state.task(raw) is not None else None


def add_study_session(state: PlannerState, draft: SessionDraft, *, entity_id: str) -> PlannerState:
    if not entity_id or not _valid_session_draft(state, draft):
        logger.debug("add_study_session declined subject_id=%s", draft.subject_id)
        return state
    session = StudySession(
        id=entity_id,
        subject_id=draft.subject_id,
        title=normalize_session_title(draft.title),
        date=_as_date(draft.date),
        start_time=draft.start_time.strip(),
        duration=draft.duration.strip(),
        linked_task_id=_linked_task_id(state, draft.linked_task_id),
    )
    return replace(state, study_sessions=(*state.study_sessions, session))


def update_study_session(state: PlannerState, session_id: str, draft: SessionDraft) -> PlannerState:
    if state.session(session_id) is None or not _valid_session_draft(state, draft):
        logger.debug("update_study_session declined id=%s", session_id)
        return state
    linked = _linked_task_id(state, draft.linked_task_id)
    sessions = tuple(
        replace(
            s,
            subject_id=draft.subject_id,
            title=normalize_session_title(draft.title),
            date=_as_date(draft.date),
            start_time=draft.start_time.strip(),
            duration=draft.duration.strip(),
            linked_task_id=linked,
        )
        if s.id == session_id
        else s
        for s in state.study_sessions
    )
    return replace(state, study_sessions=sessions)


def delete_study_session(state: PlannerState, session_id: str) -> PlannerState:
    if state.session(session_id) is None:
        return state
    return replace(state, study_sessions=tuple(s for s in state.study_sessions if s.id != session_id))


def toggle_session_completed(state: PlannerState, session_id: str, *, now: datetime) -> PlannerState:
    if state.session(session_id) is None:
        return state
    sessions = tuple(_toggled(s, now) if s.id == session_id else s for s in state.study_sessions)
    return replace(state, study_sessions=sessions)


# ---- helpers ----


def _toggled(item, now: datetime):
    completed = not item.completed
    return replace(item, completed=completed, completed_at=now if completed else None)


def _as_date(value: date) -> date:
    # datetime is a date subclass; keep only the calendar day.
    return value.date() if isinstance(value, datetime) else value
