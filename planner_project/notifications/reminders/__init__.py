"""
Reminder engine.

- predicate: stateless classification of one item at one instant
- monitor:   per-session polling with an in-memory (item, bucket) guard
- registry:  one monitor per signed-in user

Only the predicate is re-exported here; import the monitor and the
registry from their modules.
"""

from .predicate import (
    Bucket,
    Channel,
    ClassificationError,
    Fire,
    ReminderKey,
    classify,
)

__all__ = [
    "Bucket",
    "Channel",
    "ClassificationError",
    "Fire",
    "ReminderKey",
    "classify",
]
