"""
Batch reminder sweeps.

Each sweep scans every user's records for items inside its lookahead
window, e-mails the owners one by one and persists `reminder_sent`
on success. They are run by the scheduler or the `send_reminders`
management command.
"""

# =====================================================
# TASK REMINDERS
# =====================================================
from .tasks import (
    send_task_reminders,
)

# =====================================================
# EVENT REMINDERS
# =====================================================
from .events import (
    send_event_reminders,
)

__all__ = [
    "send_task_reminders",
    "send_event_reminders",
]
