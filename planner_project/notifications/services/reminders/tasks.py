"""
notifications/services/reminders/tasks.py

Hourly e-mail sweep for tasks due between the start of today and
24 hours from now.
"""

import logging
from datetime import timedelta

from django.utils import timezone

from notifications.backends import EmailBackend
from notifications.services.messages import task_email
from planner.services.records import opted_in, tasks

logger = logging.getLogger(__name__)


TASK_LOOKAHEAD = timedelta(hours=24)


def start_of_day(now):
    local = timezone.localtime(now)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


def due_tasks(now):
    """
    Open tasks in [start of today, now + 24h] whose reminder has not
    been sent and whose owner takes task e-mails.
    """
    return tasks.select_due(
        start_of_day(now),
        now + TASK_LOOKAHEAD,
        opted_in("task"),
        completed=False,
        owner__is_active=True,
        owner__email__gt="",
    )


def send_task_reminders(*, now=None, backend=None):
    """
    E-mail each due task's owner, one task at a time.

    The task is flagged only after a confirmed send, so a failure is
    retried by the next sweep that still finds it in the window.
    Returns the number of reminders sent.
    """
    now = now or timezone.now()
    backend = backend or EmailBackend.from_settings()

    matches = due_tasks(now)
    logger.info("Task sweep at %s: %d candidate(s)", f"{now:%Y-%m-%d %H:%M:%S}", len(matches))

    sent = 0
    for task in matches:
        try:
            subject, html = task_email(task.owner, task)

            if not backend.send(task.owner.email, subject, html):
                logger.warning("Task reminder for %s not delivered; will retry next sweep", task.pk)
                continue

            tasks.mark_reminder_sent(task.pk)
        except Exception:
            logger.exception("Task reminder for %s failed; moving on", task.pk)
            continue

        sent += 1

    logger.info("Task sweep done: %d of %d reminder(s) sent", sent, len(matches))
    return sent
