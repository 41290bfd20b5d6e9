# planner/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum

SESSION_TITLE_PLACEHOLDER = "Study session"


class TaskType(StrEnum):
    """
    Kind of dated work item.

    Notes:
    - exams and assignments are "assessments": study sessions may link to them
      and study time is rolled up per assessment.
    """

    TASK = "task"
    ASSIGNMENT = "assignment"
    EXAM = "exam"
    HOMEWORK = "homework"

    @property
    def is_assessment(self) -> bool:
        return self in (TaskType.EXAM, TaskType.ASSIGNMENT)

    @classmethod
    def from_raw(cls, raw: object) -> TaskType:
        if not isinstance(raw, str) or not raw:
            return cls.TASK
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.TASK


class Mode(StrEnum):
    """Operating mode; each mode persists under its own storage key."""

    APP = "app"
    DEMO = "demo"

    @classmethod
    def from_raw(cls, raw: object) -> Mode:
        if not isinstance(raw, str) or not raw:
            return cls.APP
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.APP


def new_id() -> str:
    return uuid.uuid4().hex


def normalize_session_title(title: object) -> str:
    if isinstance(title, str) and title.strip():
        return title.strip()
    return SESSION_TITLE_PLACEHOLDER


@dataclass(frozen=True, slots=True)
class Subject:
    id: str
    name: str
    color: str


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    subject_id: str
    due_date: date
    type: TaskType

    # completed_at is set iff completed (maintained by the toggle transition)
    completed: bool = False
    completed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class StudySession:
    id: str
    subject_id: str
    title: str
    date: date
    start_time: str  # display text, e.g. "4:00 PM"
    duration: str  # free text, e.g. "60 min", "1h 30m", "1:30"

    linked_task_id: str | None = None
    completed: bool = False
    completed_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """User-editable task fields (a Task without id and completion state)."""

    title: str
    subject_id: str
    due_date: date | None
    type: TaskType | str = TaskType.TASK


@dataclass(frozen=True, slots=True)
class SessionDraft:
    """User-editable study session fields."""

    subject_id: str
    date: date | None
    start_time: str
    duration: str
    title: str = ""
    linked_task_id: str | None = None


@dataclass(frozen=True, slots=True)
class PlannerState:
    """
    The whole planner: three collections in insertion order.

    Immutable; every transition in reducer.py returns a new instance.
    """

    subjects: tuple[Subject, ...] = field(default_factory=tuple)
    tasks: tuple[Task, ...] = field(default_factory=tuple)
    study_sessions: tuple[StudySession, ...] = field(default_factory=tuple)

    def subject(self, subject_id: str | None) -> Subject | None:
        if not subject_id:
            return None
        for s in self.subjects:
            if s.id == subject_id:
                return s
        return None

    def task(self, task_id: str | None) -> Task | None:
        if not task_id:
            return None
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def session(self, session_id: str | None) -> StudySession | None:
        if not session_id:
            return None
        for s in self.study_sessions:
            if s.id == session_id:
                return s
        return None
