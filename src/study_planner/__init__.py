"""
Study planner core.

Subjects, tasks/assessments and logged study sessions held as one immutable
in-memory state, persisted locally as a single JSON document per mode.
"""
