"""
Planner subsystem.

Components:
- models.py: data structures (Subject, Task, StudySession, PlannerState)
- duration.py: free-text duration parsing/formatting
- codec.py: JSON encode/decode + load/save through a key-value store
- kv_store.py: SQLite-backed durable key-value store
- reducer.py: pure state transitions with referential integrity
- retention.py: auto-removal of long-completed tasks
- views.py: read-only derived views (per-day items, study totals, rankings)
- seed.py: default subjects and the demo dataset
- api.py: high-level commands over the live AppState (transition -> sweep -> save)
"""
