# planner/seed.py

from __future__ import annotations

from datetime import date, timedelta

from .models import Mode, PlannerState, StudySession, Subject, Task, TaskType

_DEFAULT_SUBJECTS: tuple[tuple[str, str, str], ...] = (
    ("1", "Mathematics", "#6B9BC3"),
    ("2", "Physics", "#9B7FA8"),
    ("3", "Chemistry", "#C4956E"),
    ("4", "English", "#8B73A0"),
    ("5", "History", "#B87B7B"),
)


def default_subjects() -> tuple[Subject, ...]:
    return tuple(Subject(id=i, name=n, color=c) for i, n, c in _DEFAULT_SUBJECTS)


def demo_state(today: date) -> PlannerState:
    """Sample planner shown on first run of the demo mode, dated relative to today."""

    def in_days(n: int) -> date:
        return today + timedelta(days=n)

    tasks = (
        Task(id="t1", title="Read pages 120–145", subject_id="5", due_date=in_days(1), type=TaskType.TASK),
        Task(id="t2", title="Lab Report", subject_id="3", due_date=in_days(3), type=TaskType.ASSIGNMENT),
        Task(
            id="t3",
            title="Complete Chapter 5 Review",
            subject_id="1",
            due_date=in_days(5),
            type=TaskType.ASSIGNMENT,
        ),
        Task(id="t4", title="Midterm Exam", subject_id="2", due_date=in_days(7), type=TaskType.EXAM),
    )
    sessions = (
        StudySession(
            id="ss1",
            subject_id="1",
            title="Chapter 5 review",
            date=today,
            start_time="4:00 PM",
            duration="60 min",
            linked_task_id="t3",
        ),
    )
    return PlannerState(subjects=default_subjects(), tasks=tasks, study_sessions=sessions)


def seed_for_mode(mode: Mode | str, today: date) -> PlannerState:
    """
    State used when nothing usable is stored for the mode.

    demo -> sample dataset; app -> default subjects only.
    """
    if Mode.from_raw(str(mode)) == Mode.DEMO:
        return demo_state(today)
    return PlannerState(subjects=default_subjects())
