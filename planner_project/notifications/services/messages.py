"""
Reminder wording.

Short alert text for the local monitor and HTML e-mails for the
batch sweeps. Nothing here sends anything.
"""

from django.utils import timezone
from django.utils.html import format_html, format_html_join

from accounts.models import ReminderPreference
from notifications.reminders.predicate import Bucket


def _plural(count, word):
    return f"{count} {word}{'' if count == 1 else 's'}"


def _minutes_between(later, earlier):
    return round((later - earlier).total_seconds() / 60)


def owner_name(user):
    return user.get_full_name() or user.get_username()


def owner_localtime(user, value):
    """`value` in the zone the user chose for reminder e-mails."""
    return timezone.localtime(value, ReminderPreference.for_user(user).zone)


# ============================================================
# INTERACTIVE ALERTS (LOCAL MONITOR)
# ============================================================

def task_alert(task, bucket, now):
    """Return (title, body) for a task deadline alert."""
    if bucket == Bucket.OVERDUE:
        overdue = abs(_minutes_between(task.due_date, now))
        message = f'Task "{task.title}" is {_plural(overdue, "minute")} overdue!'
    else:
        remaining = max(_minutes_between(task.due_date, now), 1)
        message = f'Task "{task.title}" is due in {_plural(remaining, "minute")}'

    if task.description:
        message = f"{message}\n\n{task.description}"

    return f"Task Deadline: {task.title}", message


def event_alert(event, now):
    """Return (title, body) for an event lead-time alert."""
    until = _minutes_between(event.start_date, now)

    if until <= 0:
        when = "now"
    elif until < 60:
        when = f"in {_plural(until, 'minute')}"
    else:
        when = f"in {_plural(until // 60, 'hour')}"

    message = f'Your event "{event.title}" is starting {when}'
    if event.description:
        message = f"{message}\n\n{event.description}"

    return f"Event Reminder: {event.title}", message


# ============================================================
# E-MAILS (BATCH SWEEPS)
# ============================================================

EMAIL_FRAME = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background: {accent}; color: white; padding: 20px; border-radius: 8px 8px 0 0;">
      <h1>{heading}</h1>
      <p>Hello {name}! {intro}</p>
    </div>
    <div style="background: #f9fafb; padding: 20px; border-radius: 0 0 8px 8px;">
      <div style="background: white; padding: 15px; border-radius: 8px; margin: 15px 0; border-left: 4px solid {accent};">
        <h2>{title}</h2>
        {details}
      </div>
      <p>{closing}</p>
    </div>
    <div style="text-align: center; padding: 20px; color: #6b7280; font-size: 14px;">
      <p>This reminder was sent from your Planner.</p>
      <p>{footer}</p>
    </div>
  </div>
</body>
</html>
"""

PRIORITY_COLOURS = {
    "high": "#dc2626",
    "medium": "#d97706",
    "low": "#0284c7",
}


def _details(rows):
    return format_html_join(
        "\n",
        "<p><strong>{}</strong> {}</p>",
        rows,
    )


def task_email(user, task):
    """Return (subject, html) for a task due-date reminder."""
    rows = []
    if task.description:
        rows.append(("Description:", task.description))
    if task.due_date:
        rows.append(("Due Date:", f"{owner_localtime(user, task.due_date):%A, %d %B %Y}"))

    priority = format_html(
        '<span style="color: {}; font-weight: bold;">{}</span>',
        PRIORITY_COLOURS.get(task.priority, "#333"),
        str(task.priority).upper(),
    )

    html = format_html(
        EMAIL_FRAME,
        accent="#3b82f6",
        heading="Task Reminder",
        name=owner_name(user),
        intro="You have an upcoming task.",
        title=task.title,
        details=format_html("{}\n{}", _details(rows), priority),
        closing="Don't forget to complete this task before the due date!",
        footer="Log in to mark this task as complete.",
    )

    return f"Task Reminder: {task.title}", html


def event_email(user, event):
    """Return (subject, html) for an upcoming event reminder."""
    start = owner_localtime(user, event.start_date)

    rows = []
    if event.description:
        rows.append(("Description:", event.description))
    rows.append(("Date:", f"{start:%A, %d %B %Y}"))
    if event.all_day:
        rows.append(("All Day Event", ""))
    else:
        rows.append(("Time:", f"{start:%H:%M}"))
    if event.category:
        rows.append(("Category:", event.category))

    html = format_html(
        EMAIL_FRAME,
        accent="#7c3aed",
        heading="Event Reminder",
        name=owner_name(user),
        intro="You have an upcoming event.",
        title=event.title,
        details=_details(rows),
        closing="Don't miss your scheduled event!",
        footer="Log in to view more details.",
    )

    return f"Event Reminder: {event.title}", html
