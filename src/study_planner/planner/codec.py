# planner/codec.py

"""
Persistence codec.

The planner is stored as one JSON document under one key:

    {"version": 1, "subjects": [...], "tasks": [...], "studySessions": [...]}

Entity fields use camelCase and dates are ISO 8601 strings, which keeps blobs
written by older versions of the app readable. Decoding is tolerant: missing
collections, dates and titles get defaults; only an unparseable document is an
error (CorruptStateError).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from ..core.ports import KeyValueStore
from .models import (
    SESSION_TITLE_PLACEHOLDER,
    Mode,
    PlannerState,
    StudySession,
    Subject,
    Task,
    TaskType,
    new_id,
)
from .seed import default_subjects

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
DEFAULT_SUBJECT_COLOR = "#7A9B7F"


class CorruptStateError(ValueError):
    """The stored blob exists but cannot be decoded as a planner document."""


class LoadStatus(StrEnum):
    LOADED = "loaded"
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass(frozen=True, slots=True)
class LoadResult:
    status: LoadStatus
    state: PlannerState | None = None
    error: str | None = None


def storage_key(prefix: str, mode: Mode | str) -> str:
    """One key per operating mode, so demo data never overwrites real data."""
    return f"{prefix}:{Mode.from_raw(str(mode)).value}"


# ---- encoding ----


def _subject_to_dict(s: Subject) -> dict[str, Any]:
    return {"id": s.id, "name": s.name, "color": s.color}


def _task_to_dict(t: Task) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": t.id,
        "title": t.title,
        "subjectId": t.subject_id,
        "dueDate": t.due_date.isoformat(),
        "type": t.type.value,
        "completed": t.completed,
    }
    if t.completed_at is not None:
        out["completedAt"] = t.completed_at.isoformat()
    return out


def _session_to_dict(s: StudySession) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": s.id,
        "subjectId": s.subject_id,
        "title": s.title,
        "date": s.date.isoformat(),
        "startTime": s.start_time,
        "duration": s.duration,
        "completed": s.completed,
    }
    if s.linked_task_id:
        out["linkedTaskId"] = s.linked_task_id
    if s.completed_at is not None:
        out["completedAt"] = s.completed_at.isoformat()
    return out


def encode_state(state: PlannerState) -> str:
    doc = {
        "version": FORMAT_VERSION,
        "subjects": [_subject_to_dict(s) for s in state.subjects],
        "tasks": [_task_to_dict(t) for t in state.tasks],
        "studySessions": [_session_to_dict(s) for s in state.study_sessions],
    }
    return json.dumps(doc, ensure_ascii=False)


# ---- decoding ----


def _parse_datetime(raw: object) -> datetime | None:
    """
    Accept ISO strings ("2024-05-01", "2024-05-01T09:30:00", "...Z") and epoch
    milliseconds. Aware values are converted to local wall-clock time.
    """
    dt: datetime
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return datetime.fromtimestamp(raw / 1000.0)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    if dt.tzinfo is not None:
        try:
            dt = dt.astimezone().replace(tzinfo=None)
        except (OverflowError, ValueError):
            return None
    return dt


def _parse_date(raw: object) -> date | None:
    dt = _parse_datetime(raw)
    return dt.date() if dt is not None else None


def _str(raw: object, default: str = "") -> str:
    if raw is None:
        return default
    return raw if isinstance(raw, str) else str(raw)


def _session_title(raw: object) -> str:
    # Blank titles get the placeholder; anything else is kept as stored.
    if isinstance(raw, str) and raw.strip():
        return raw
    return SESSION_TITLE_PLACEHOLDER


def _id(raw: object) -> str:
    s = _str(raw).strip()
    return s or new_id()


def _completion(raw: dict[str, Any], now: datetime) -> tuple[bool, datetime | None]:
    # completed_at is kept iff completed; a missing or unreadable stamp on a
    # completed record becomes `now`.
    completed = bool(raw.get("completed"))
    if not completed:
        return False, None
    return True, _parse_datetime(raw.get("completedAt")) or now


def _subject_from_dict(raw: dict[str, Any]) -> Subject:
    return Subject(
        id=_id(raw.get("id")),
        name=_str(raw.get("name")),
        color=_str(raw.get("color"), DEFAULT_SUBJECT_COLOR) or DEFAULT_SUBJECT_COLOR,
    )


def _task_from_dict(raw: dict[str, Any], now: datetime) -> Task:
    completed, completed_at = _completion(raw, now)
    return Task(
        id=_id(raw.get("id")),
        title=_str(raw.get("title")),
        subject_id=_str(raw.get("subjectId")),
        due_date=_parse_date(raw.get("dueDate")) or now.date(),
        type=TaskType.from_raw(raw.get("type")),
        completed=completed,
        completed_at=completed_at,
    )


def _session_from_dict(raw: dict[str, Any], now: datetime) -> StudySession:
    completed, completed_at = _completion(raw, now)
    linked = _str(raw.get("linkedTaskId")).strip() or None
    return StudySession(
        id=_id(raw.get("id")),
        subject_id=_str(raw.get("subjectId")),
        title=_session_title(raw.get("title")),
        date=_parse_date(raw.get("date")) or now.date(),
        start_time=_str(raw.get("startTime")),
        duration=_str(raw.get("duration")),
        linked_task_id=linked,
        completed=completed,
        completed_at=completed_at,
    )


def _records(doc: dict[str, Any], name: str) -> list[dict[str, Any]] | None:
    items = doc.get(name)
    if not isinstance(items, list):
        return None
    return [r for r in items if isinstance(r, dict)]


def decode_state(raw: str, *, now: datetime | None = None) -> PlannerState:
    """
    Rebuild a PlannerState from a stored blob.

    Raises CorruptStateError if the blob is not a JSON object. Everything else
    is repaired with defaults (see module docstring).
    """
    if now is None:
        now = datetime.now()

    try:
        doc = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise CorruptStateError(f"invalid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise CorruptStateError(f"expected a JSON object, got {type(doc).__name__}")

    subject_rows = _records(doc, "subjects")
    subjects = (
        tuple(_subject_from_dict(r) for r in subject_rows)
        if subject_rows is not None
        else default_subjects()
    )
    tasks = tuple(_task_from_dict(r, now) for r in (_records(doc, "tasks") or []))
    sessions = tuple(_session_from_dict(r, now) for r in (_records(doc, "studySessions") or []))

    return PlannerState(subjects=subjects, tasks=tasks, study_sessions=sessions)


# ---- durable boundary ----


class PlannerRepo:
    """Loads/saves the planner blob under a single key of a KeyValueStore."""

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self, *, now: datetime | None = None) -> LoadResult:
        try:
            raw = self._store.get(self._key)
        except Exception as e:
            logger.exception("Failed to read planner data key=%s", self._key)
            return LoadResult(status=LoadStatus.CORRUPT, error=f"read failed: {e}")

        if raw is None:
            logger.info("No saved planner data key=%s", self._key)
            return LoadResult(status=LoadStatus.MISSING)

        try:
            state = decode_state(raw, now=now)
        except CorruptStateError as e:
            logger.exception("Failed to load saved planner data key=%s", self._key)
            return LoadResult(status=LoadStatus.CORRUPT, error=str(e))

        logger.info(
            "Loaded planner data key=%s subjects=%d tasks=%d sessions=%d",
            self._key,
            len(state.subjects),
            len(state.tasks),
            len(state.study_sessions),
        )
        return LoadResult(status=LoadStatus.LOADED, state=state)

    def save(self, state: PlannerState) -> bool:
        """Best-effort write; on failure the in-memory state stays authoritative."""
        try:
            self._store.set(self._key, encode_state(state))
        except Exception:
            logger.exception("Failed to save planner data key=%s", self._key)
            return False
        return True
