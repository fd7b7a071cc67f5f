"""
notifications/services/reminders/events.py

Half-hourly e-mail sweep for events starting within the next two hours.
"""

import logging
from datetime import timedelta

from django.utils import timezone

from notifications.backends import EmailBackend
from notifications.services.messages import event_email
from planner.services.records import events, opted_in

logger = logging.getLogger(__name__)


EVENT_LOOKAHEAD = timedelta(hours=2)


def due_events(now):
    """
    Events starting in [now, now + 2h] with reminders enabled and not
    yet sent. The e-mail goes out whatever the event's alert channel is.
    """
    return events.select_due(
        now,
        now + EVENT_LOOKAHEAD,
        opted_in("event"),
        notifications_enabled=True,
        owner__is_active=True,
        owner__email__gt="",
    )


def send_event_reminders(*, now=None, backend=None):
    """
    E-mail each upcoming event's owner, one event at a time.

    Returns the number of reminders sent.
    """
    now = now or timezone.now()
    backend = backend or EmailBackend.from_settings()

    matches = due_events(now)
    logger.info("Event sweep at %s: %d candidate(s)", f"{now:%Y-%m-%d %H:%M:%S}", len(matches))

    sent = 0
    for event in matches:
        try:
            subject, html = event_email(event.owner, event)

            if not backend.send(event.owner.email, subject, html):
                logger.warning("Event reminder for %s not delivered; will retry next sweep", event.pk)
                continue

            events.mark_reminder_sent(event.pk)
        except Exception:
            logger.exception("Event reminder for %s failed; moving on", event.pk)
            continue

        sent += 1

    logger.info("Event sweep done: %d of %d reminder(s) sent", sent, len(matches))
    return sent
