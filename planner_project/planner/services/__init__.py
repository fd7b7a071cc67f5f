"""
Planner service layer.

`records` exposes one owner-scoped store per model.
"""

from .records import (
    RecordStore,
    events,
    opted_in,
    tasks,
)

__all__ = [
    "RecordStore",
    "events",
    "opted_in",
    "tasks",
]
