from datetime import timedelta

import pytest

from accounts.models import ReminderPreference
from notifications.reminders.predicate import Bucket
from notifications.services.messages import event_alert, event_email, task_alert, task_email
from planner.models import Event, Task


def test_overdue_task_alert_counts_minutes(now):
    task = Task(title="Renew passport", due_date=now - timedelta(minutes=1))

    title, body = task_alert(task, Bucket.OVERDUE, now)

    assert title == "Task Deadline: Renew passport"
    assert body == 'Task "Renew passport" is 1 minute overdue!'


def test_imminent_task_alert_appends_description(now):
    task = Task(title="Call mum", description="Her birthday", due_date=now + timedelta(minutes=20))

    _, body = task_alert(task, Bucket.IMMINENT, now)

    assert body == 'Task "Call mum" is due in 20 minutes\n\nHer birthday'


def test_event_alert_wording(now):
    event = Event(title="Flight", start_date=now + timedelta(hours=2), end_date=now + timedelta(hours=5))

    assert event_alert(event, now)[1] == 'Your event "Flight" is starting in 2 hours'
    assert event_alert(event, event.start_date)[1] == 'Your event "Flight" is starting now'


def test_task_email_shows_priority_and_escapes_content(django_user_model, now):
    owner = django_user_model(username="bob", email="bob@example.com")
    task = Task(
        owner=owner,
        title="Fix <b>bug</b>",
        priority=Task.Priority.HIGH,
        due_date=now,
    )

    subject, html = task_email(owner, task)

    assert subject == "Task Reminder: Fix <b>bug</b>"
    assert "Fix &lt;b&gt;bug&lt;/b&gt;" in html
    assert "HIGH" in html
    assert "Hello bob!" in html
    assert "Monday, 01 January 2024" in html


def test_all_day_event_email(django_user_model, now):
    owner = django_user_model(username="cy", first_name="Cy", email="cy@example.com")
    event = Event(
        owner=owner,
        title="Company offsite",
        start_date=now,
        end_date=now + timedelta(hours=8),
        all_day=True,
        category="Work",
    )

    subject, html = event_email(owner, event)

    assert subject == "Event Reminder: Company offsite"
    assert "All Day Event" in html
    assert "Time:" not in html
    assert "Work" in html


@pytest.mark.django_db
def test_email_dates_use_the_owners_time_zone(user, now):
    ReminderPreference.objects.create(user=user, timezone="Asia/Tokyo")
    task = Task(owner=user, title="Late call", due_date=now.replace(hour=20))
    event = Event(owner=user, title="Standup", start_date=now.replace(hour=23), end_date=now.replace(hour=23, minute=30))

    _, task_html = task_email(user, task)
    _, event_html = event_email(user, event)

    assert "Tuesday, 02 January 2024" in task_html
    assert "08:00" in event_html
