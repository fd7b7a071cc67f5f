"""
Notification service layer.

- reminders: batch e-mail sweeps over all users' tasks and events
- messages:  wording of alerts and e-mails
- preview:   one-off sample reminders for checking e-mail set-up
"""

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    send_event_reminders,
    send_task_reminders,
)

# =====================================================
# PREVIEW
# =====================================================
from .preview import (
    send_test_reminder,
)

__all__ = [
    # Reminders
    "send_task_reminders",
    "send_event_reminders",

    # Preview
    "send_test_reminder",
]
