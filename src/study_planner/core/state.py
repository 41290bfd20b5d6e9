# src/study_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ..planner.codec import PlannerRepo
from ..planner.models import Mode, PlannerState, new_id
from .ports import Clock, IdFactory


@dataclass
class AppState:
    """
    The single live planner instance.

    `planner` is an immutable value replaced on every transition; planner/api.py
    is the only code that assigns it after hydration.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: Any

    mode: Mode
    repo: PlannerRepo
    planner: PlannerState = field(default_factory=PlannerState)

    clock: Clock = datetime.now
    id_factory: IdFactory = new_id

    # Number of successful saves in this process (diagnostics/tests).
    saves: int = 0
    failed_saves: int = 0
