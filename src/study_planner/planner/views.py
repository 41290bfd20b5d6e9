# planner/views.py

"""
Derived views over a PlannerState.

Everything here is read-only and recomputed on each call; collections are small
(hundreds of rows), so a linear scan per query is fine and nothing is cached.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import StrEnum

from .duration import parse_duration_to_minutes
from .models import PlannerState, StudySession, Subject, Task, TaskType

SOON_DAYS = 3


class DueTone(StrEnum):
    MUTED = "muted"  # completed
    OVERDUE = "overdue"
    TODAY = "today"
    SOON = "soon"
    OK = "ok"


@dataclass(frozen=True, slots=True)
class DayItems:
    tasks: tuple[Task, ...]
    sessions: tuple[StudySession, ...]


@dataclass(frozen=True, slots=True)
class SubjectTotal:
    subject_id: str
    subject: Subject | None  # None if the subject no longer exists
    minutes: int


@dataclass(frozen=True, slots=True)
class AssessmentTotal:
    task: Task
    minutes: int


@dataclass(frozen=True, slots=True)
class DeletionImpact:
    tasks: int
    sessions: int


def _cutoff(range_days: int | None, today: date) -> date | None:
    if range_days is None:
        return None
    return today - timedelta(days=max(0, int(range_days)))


def _sessions_in_range(
    state: PlannerState, range_days: int | None, today: date
) -> Iterable[StudySession]:
    cutoff = _cutoff(range_days, today)
    if cutoff is None:
        return state.study_sessions
    return [s for s in state.study_sessions if s.date >= cutoff]


def _first_by_minutes(totals: dict[str, int]) -> tuple[str, int] | None:
    # sorted() is stable: ties keep first-seen order.
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return ranked[0] if ranked else None


# ---- calendar ----


def items_for_date(state: PlannerState, day: date) -> DayItems:
    if isinstance(day, datetime):
        day = day.date()
    return DayItems(
        tasks=tuple(t for t in state.tasks if t.due_date == day),
        sessions=tuple(s for s in state.study_sessions if s.date == day),
    )


# ---- study time ----


def minutes_by_subject(
    state: PlannerState, range_days: int | None = None, *, today: date | None = None
) -> dict[str, int]:
    """
    Study minutes per subject_id.

    range_days=7 counts sessions dated on/after the day 7 days before today;
    None counts everything.
    """
    today = today or date.today()
    totals: dict[str, int] = {}
    for s in _sessions_in_range(state, range_days, today):
        totals[s.subject_id] = totals.get(s.subject_id, 0) + parse_duration_to_minutes(s.duration)
    return totals


def total_minutes(
    state: PlannerState, range_days: int | None = None, *, today: date | None = None
) -> int:
    today = today or date.today()
    return sum(parse_duration_to_minutes(s.duration) for s in _sessions_in_range(state, range_days, today))


def minutes_by_assessment(state: PlannerState) -> dict[str, int]:
    """
    Study minutes per linked exam/assignment.

    Sessions linked to a missing task or to a task/homework item are left out
    (they still count towards their subject).
    """
    tasks_by_id = {t.id: t for t in state.tasks}
    totals: dict[str, int] = {}
    for s in state.study_sessions:
        if not s.linked_task_id:
            continue
        task = tasks_by_id.get(s.linked_task_id)
        if task is None or not task.type.is_assessment:
            continue
        totals[task.id] = totals.get(task.id, 0) + parse_duration_to_minutes(s.duration)
    return totals


def minutes_for_task(state: PlannerState, task_id: str) -> int:
    return sum(
        parse_duration_to_minutes(s.duration) for s in state.study_sessions if s.linked_task_id == task_id
    )


def top_subject_by_minutes(
    state: PlannerState, range_days: int | None = None, *, today: date | None = None
) -> SubjectTotal | None:
    best = _first_by_minutes(minutes_by_subject(state, range_days, today=today))
    if best is None:
        return None
    subject_id, minutes = best
    return SubjectTotal(subject_id=subject_id, subject=state.subject(subject_id), minutes=minutes)


def most_studied_assessment(state: PlannerState) -> AssessmentTotal | None:
    best = _first_by_minutes(minutes_by_assessment(state))
    if best is None:
        return None
    task_id, minutes = best
    task = state.task(task_id)
    if task is None:
        return None
    return AssessmentTotal(task=task, minutes=minutes)


# ---- deadlines ----


def upcoming_deadlines(
    state: PlannerState,
    limit: int | None = None,
    *,
    now: datetime | None = None,
    types: Iterable[TaskType] | None = None,
) -> list[Task]:
    """Tasks due today or later, soonest first (stable for equal dates)."""
    today = (now or datetime.now()).date()
    allowed = set(types) if types is not None else None
    out = [
        t for t in state.tasks if t.due_date >= today and (allowed is None or t.type in allowed)
    ]
    out.sort(key=lambda t: t.due_date)
    if limit is not None:
        out = out[: max(0, int(limit))]
    return out


def days_until(due: date, today: date) -> int:
    return (due - today).days


def due_tone(task: Task, today: date) -> DueTone:
    if task.completed:
        return DueTone.MUTED
    d = days_until(task.due_date, today)
    if d < 0:
        return DueTone.OVERDUE
    if d == 0:
        return DueTone.TODAY
    if d <= SOON_DAYS:
        return DueTone.SOON
    return DueTone.OK


# ---- lists ----


def tasks_by_type(
    state: PlannerState, subject_id: str | None = None, *, include_completed: bool = False
) -> dict[TaskType, list[Task]]:
    """Tasks grouped into one bucket per type, each sorted by due date."""
    out: dict[TaskType, list[Task]] = {tt: [] for tt in TaskType}
    for t in state.tasks:
        if subject_id is not None and t.subject_id != subject_id:
            continue
        if t.completed and not include_completed:
            continue
        out[t.type].append(t)
    for bucket in out.values():
        bucket.sort(key=lambda t: t.due_date)
    return out


def visible_sessions(
    state: PlannerState, subject_id: str | None = None, *, include_completed: bool = False
) -> list[StudySession]:
    out = [
        s
        for s in state.study_sessions
        if (subject_id is None or s.subject_id == subject_id) and (include_completed or not s.completed)
    ]
    out.sort(key=lambda s: s.date)
    return out


def linkable_assessments(state: PlannerState, subject_id: str | None = None) -> list[Task]:
    """Exams/assignments a study session may link to, soonest first."""
    out = [
        t
        for t in state.tasks
        if t.type.is_assessment and (subject_id is None or t.subject_id == subject_id)
    ]
    out.sort(key=lambda t: t.due_date)
    return out


def subject_deletion_impact(state: PlannerState, subject_id: str) -> DeletionImpact:
    """How many items deleting the subject would remove along with it."""
    return DeletionImpact(
        tasks=sum(1 for t in state.tasks if t.subject_id == subject_id),
        sessions=sum(1 for s in state.study_sessions if s.subject_id == subject_id),
    )
