"""
Reminder predicate.

Pure classification of a single task or event at a given instant.
It has no memory: calling it again with the same inputs gives the
same answer, and repeat suppression is the caller's job.

All arithmetic is done on integer millisecond timestamps.
"""

import enum
from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from planner.models import Event


MINUTE_MS = 60 * 1000

# Tasks: "imminent" while 0 < due - now <= 30 min, "overdue" once due - now <= 0.
IMMINENT_WINDOW_MS = 30 * MINUTE_MS

# Events fire within this distance of (start - lead). Must exceed the
# monitor's polling interval so every reminder instant is seen at least once.
EVENT_TOLERANCE_MS = 1 * MINUTE_MS


# Delivery channels are shared with the Event model.
Channel = Event.Channel


class ClassificationError(ValueError):
    """The item is missing a required field or carries a bad timestamp."""


class Bucket(str, enum.Enum):
    """
    Reminder thresholds. Tasks use IMMINENT and OVERDUE only; there is
    deliberately no "1 hour before" task bucket, since a 30-minute
    warning plus the overdue alert cover a task's deadline. Events
    use LEAD, their configured minutes before start.
    """

    IMMINENT = "imminent"
    OVERDUE = "overdue"
    LEAD = "lead"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Fire:
    bucket: Bucket
    channel: Channel


@dataclass(frozen=True)
class ReminderKey:
    kind: str
    item_id: str
    bucket: Bucket

    @classmethod
    def for_item(cls, item, bucket):
        return cls(item.reminder_kind, str(item.pk), bucket)


def to_millis(value):
    """
    Convert a timestamp to integer epoch milliseconds.

    Accepts datetimes (naive ones are read in the default time zone)
    and ISO-8601 strings.
    """
    if isinstance(value, str):
        parsed = parse_datetime(value)
        if parsed is None:
            raise ClassificationError(f"Unparseable timestamp: {value!r}")
        value = parsed

    if not isinstance(value, datetime):
        raise ClassificationError(f"Not a timestamp: {value!r}")

    if timezone.is_naive(value):
        value = timezone.make_aware(value)

    return int(value.timestamp() * 1000)


# ============================================================
# TASKS
# ============================================================

def classify_task(now, task):
    if task.completed or task.due_date is None:
        return None

    remaining = to_millis(task.due_date) - to_millis(now)

    if remaining <= 0:
        return Fire(Bucket.OVERDUE, Channel.BROWSER)
    if remaining <= IMMINENT_WINDOW_MS:
        return Fire(Bucket.IMMINENT, Channel.BROWSER)
    return None


# ============================================================
# EVENTS
# ============================================================

def classify_event(now, event):
    if not event.notifications_enabled:
        return None

    if event.start_date is None:
        raise ClassificationError(f"Event {event.pk} has no start date")

    lead = event.lead_minutes
    if lead is None or lead < 0:
        raise ClassificationError(f"Event {event.pk} has invalid lead time {lead!r}")

    try:
        channel = Channel(event.notification_channel)
    except ValueError:
        raise ClassificationError(
            f"Event {event.pk} has unknown channel {event.notification_channel!r}"
        ) from None

    start = to_millis(event.start_date)
    if event.end_date is not None and to_millis(event.end_date) < start:
        raise ClassificationError(f"Event {event.pk} ends before it starts")

    reminder_at = start - lead * MINUTE_MS

    if abs(to_millis(now) - reminder_at) <= EVENT_TOLERANCE_MS:
        return Fire(Bucket.LEAD, channel)
    return None


_CLASSIFIERS = {
    "task": classify_task,
    "event": classify_event,
}


def classify(now, item):
    """
    Return a `Fire` when `item` has crossed a reminder threshold at
    `now`, otherwise None.
    """
    kind = getattr(item, "reminder_kind", None)
    try:
        classifier = _CLASSIFIERS[kind]
    except KeyError:
        raise ClassificationError(f"Cannot classify {type(item).__name__}") from None

    return classifier(now, item)
