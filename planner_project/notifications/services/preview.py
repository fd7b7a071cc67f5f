from datetime import timedelta

from django.utils import timezone

from notifications.backends import EmailBackend
from notifications.services.messages import event_email, task_email
from planner.models import Event, Task


def send_test_reminder(user, kind, backend=None):
    """
    Send a sample task or event reminder e-mail to `user`.

    Lets a user check their e-mail set-up. The sample items are
    never saved and no `reminder_sent` flag is touched.
    """
    backend = backend or EmailBackend.from_settings()
    now = timezone.now()

    if kind == "task":
        sample = Task(
            owner=user,
            title="Test Task Reminder",
            description="This is a test notification from your planner.",
            due_date=now,
            priority=Task.Priority.MEDIUM,
        )
        subject, html = task_email(user, sample)
    elif kind == "event":
        sample = Event(
            owner=user,
            title="Test Event Reminder",
            description="This is a test event notification.",
            start_date=now,
            end_date=now + timedelta(hours=1),
            category="Test",
        )
        subject, html = event_email(user, sample)
    else:
        raise ValueError(f"Unknown reminder kind: {kind!r}")

    return backend.send(user.email, subject, html)
