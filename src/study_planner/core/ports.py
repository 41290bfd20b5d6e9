# src/study_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the durable store and the time source swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

Clock = Callable[[], datetime]
# Returns naive local wall-clock time (datetime.now by default).

IdFactory = Callable[[], str]


class KeyValueStore(Protocol):
    """
    Durable string-to-string store (one blob per key).

    Implementations may raise on I/O failure; PlannerRepo treats a failed write
    as non-fatal and keeps the in-memory state.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
