# tests/test_api.py

from __future__ import annotations

import json
import logging
from datetime import date

from study_planner.bootstrap import create_initial_state, hydrate
from study_planner.core.state import AppState
from study_planner.planner import api
from study_planner.planner.codec import PlannerRepo, decode_state, storage_key
from study_planner.planner.models import Mode, SessionDraft, TaskDraft, TaskType
from study_planner.planner.seed import default_subjects

from .fakes import FailingKeyValueStore, FakeClock, InMemoryKeyValueStore, SequentialIds


def _stored(app: AppState, kv: InMemoryKeyValueStore):
    return decode_state(kv.data[app.repo.key], now=app.clock())


def test_first_run_in_app_mode_seeds_default_subjects_and_saves(app: AppState, kv: InMemoryKeyValueStore) -> None:
    assert app.mode == Mode.APP
    assert app.planner.subjects == default_subjects()
    assert app.planner.tasks == ()
    assert app.repo.key == "test-planner:app"
    assert _stored(app, kv) == app.planner


def test_demo_mode_uses_its_own_key(settings, kv: InMemoryKeyValueStore, clock: FakeClock) -> None:
    real = create_initial_state(settings=settings, store=kv, clock=clock)
    demo = create_initial_state(settings=settings, mode="demo", store=kv, clock=clock)

    assert demo.repo.key != real.repo.key
    assert len(demo.planner.tasks) == 4
    assert len(demo.planner.study_sessions) == 1
    assert real.planner.tasks == ()
    assert set(kv.data) == {storage_key("test-planner", Mode.APP), storage_key("test-planner", Mode.DEMO)}


def test_every_change_is_persisted_and_survives_reload(
    app: AppState, settings, kv: InMemoryKeyValueStore, clock: FakeClock
) -> None:
    subject_id = api.add_subject(app, "Biology", "#00aa00")
    assert subject_id == "id-1"

    task_id = api.add_task(app, TaskDraft(title="Cells quiz", subject_id=subject_id, due_date=date(2026, 3, 15), type=TaskType.EXAM))
    session_id = api.add_study_session(
        app,
        SessionDraft(subject_id=subject_id, date=date(2026, 3, 11), start_time="5 PM", duration="1h", linked_task_id=task_id),
    )
    assert task_id and session_id
    assert _stored(app, kv) == app.planner

    reloaded = create_initial_state(settings=settings, store=kv, clock=clock)
    assert reloaded.planner == app.planner


def test_declined_command_does_not_save(app: AppState, kv: InMemoryKeyValueStore) -> None:
    writes = len(kv.writes)

    assert api.add_subject(app, "  ", "#fff") is None
    assert api.add_task(app, TaskDraft(title="x", subject_id="nope", due_date=date(2026, 3, 15))) is None
    assert api.delete_task(app, "nope") is False
    assert api.update_subject(app, "nope", "Name", "#fff") is False

    assert len(kv.writes) == writes


def test_delete_subject_cascades_through_api(app: AppState, kv: InMemoryKeyValueStore) -> None:
    task_id = api.add_task(app, TaskDraft(title="Proofs", subject_id="1", due_date=date(2026, 3, 12), type="assignment"))
    session_id = api.add_study_session(
        app, SessionDraft(subject_id="1", date=date(2026, 3, 11), start_time="9:00", duration="90 min", linked_task_id=task_id)
    )

    assert api.delete_subject(app, "1") is True

    assert app.planner.task(task_id) is None
    assert app.planner.session(session_id) is None
    assert _stored(app, kv).subject("1") is None


def test_delete_task_unlinks_session_through_api(app: AppState) -> None:
    task_id = api.add_task(app, TaskDraft(title="Essay", subject_id="4", due_date=date(2026, 3, 14), type="assignment"))
    session_id = api.add_study_session(
        app, SessionDraft(subject_id="4", date=date(2026, 3, 11), start_time="9:00", duration="1h", linked_task_id=task_id)
    )

    assert api.delete_task(app, task_id) is True

    session = app.planner.session(session_id)
    assert session is not None
    assert session.linked_task_id is None


def test_completed_task_is_swept_after_window(app: AppState, kv: InMemoryKeyValueStore, clock: FakeClock) -> None:
    task_id = api.add_task(app, TaskDraft(title="Quiz", subject_id="2", due_date=date(2026, 3, 10)))
    assert api.toggle_task_completed(app, task_id) is True
    task = app.planner.task(task_id)
    assert task is not None and task.completed_at == clock.now

    clock.advance(hours=23)
    assert api.refresh(app) is False
    assert app.planner.task(task_id) is not None

    clock.advance(hours=2)
    writes = len(kv.writes)
    assert api.refresh(app) is True
    assert app.planner.task(task_id) is None
    assert len(kv.writes) == writes + 1
    assert _stored(app, kv).task(task_id) is None


def test_unrelated_change_also_sweeps(app: AppState, clock: FakeClock) -> None:
    task_id = api.add_task(app, TaskDraft(title="Reading", subject_id="5", due_date=date(2026, 3, 10)))
    api.toggle_task_completed(app, task_id)
    clock.advance(hours=30)

    api.add_subject(app, "Art", "#f0f")

    assert app.planner.task(task_id) is None


def test_toggle_session_round_trip(app: AppState) -> None:
    session_id = api.add_study_session(
        app, SessionDraft(subject_id="3", date=date(2026, 3, 10), start_time="8:00", duration="45m")
    )
    assert api.toggle_session_completed(app, session_id) is True
    assert app.planner.session(session_id).completed_at is not None
    assert api.toggle_session_completed(app, session_id) is True
    session = app.planner.session(session_id)
    assert session.completed is False
    assert session.completed_at is None


def test_update_and_delete_session(app: AppState) -> None:
    session_id = api.add_study_session(
        app, SessionDraft(subject_id="3", date=date(2026, 3, 10), start_time="8:00", duration="45m")
    )
    assert api.update_study_session(
        app, session_id, SessionDraft(subject_id="3", date=date(2026, 3, 11), start_time="9:00", duration="1h", title="Titration")
    )
    assert app.planner.session(session_id).title == "Titration"
    assert api.delete_study_session(app, session_id) is True
    assert app.planner.session(session_id) is None


def test_corrupt_blob_falls_back_to_seed(settings, clock: FakeClock, caplog) -> None:
    kv = InMemoryKeyValueStore(data={"test-planner:demo": "{broken"})
    with caplog.at_level(logging.WARNING):
        app = create_initial_state(settings=settings, mode=Mode.DEMO, store=kv, clock=clock)

    assert len(app.planner.tasks) == 4
    assert json.loads(kv.data["test-planner:demo"])["subjects"]
    assert any("unusable" in r.getMessage() for r in caplog.records)


def test_hydrate_sweeps_loaded_state(clock: FakeClock) -> None:
    kv = InMemoryKeyValueStore()
    blob = {
        "subjects": [{"id": "1", "name": "Maths", "color": "#fff"}],
        "tasks": [
            {"id": "old", "title": "Old", "subjectId": "1", "dueDate": "2026-03-01", "type": "task",
             "completed": True, "completedAt": "2026-03-08T09:00:00"},
            {"id": "new", "title": "New", "subjectId": "1", "dueDate": "2026-03-01", "type": "task",
             "completed": True, "completedAt": "2026-03-10T08:00:00"},
        ],
    }
    kv.data["k"] = json.dumps(blob)

    state = hydrate(PlannerRepo(kv, "k"), Mode.APP, now=clock())

    assert [t.id for t in state.tasks] == ["new"]


def test_failed_writes_keep_in_memory_state(settings, clock: FakeClock) -> None:
    store = FailingKeyValueStore()
    app = create_initial_state(settings=settings, store=store, clock=clock, id_factory=SequentialIds("s"))

    subject_id = api.add_subject(app, "Music", "#123456")

    assert subject_id == "s-1"
    assert app.planner.subject(subject_id) is not None
    assert app.saves == 0
    assert app.failed_saves == 2
