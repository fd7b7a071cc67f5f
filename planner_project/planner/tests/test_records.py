from datetime import timedelta

import pytest

from planner.models import Event, Task
from planner.services import records

pytestmark = pytest.mark.django_db


def test_list_is_owner_scoped(user, other_user):
    mine = records.tasks.create(user, title="Mine")
    records.tasks.create(other_user, title="Theirs")

    assert records.tasks.list(user.pk) == [mine]


def test_get_raises_not_found_for_foreign_or_unknown_ids(user, other_user):
    theirs = records.tasks.create(other_user, title="Theirs")

    with pytest.raises(records.tasks.NotFound):
        records.tasks.get(user.pk, theirs.pk)
    with pytest.raises(Task.DoesNotExist):
        records.tasks.get(user.pk, "no-such-id")


def test_create_accepts_client_supplied_id(user):
    task = records.tasks.create(user, id="client-42", title="Offline edit")

    assert records.tasks.get(user.pk, "client-42") == task


def test_update_returns_changed_count(user, other_user):
    task = records.tasks.create(user, title="Draft")

    assert records.tasks.update(user.pk, task.pk, title="Final", completed=True) == 1
    assert records.tasks.update(other_user.pk, task.pk, title="Hijacked") == 0

    task.refresh_from_db()
    assert task.title == "Final"
    assert task.completed is True


def test_delete_returns_changed_count(user, other_user):
    task = records.tasks.create(user, title="Temporary")

    assert records.tasks.delete(other_user.pk, task.pk) == 0
    assert records.tasks.delete(user.pk, task.pk) == 1
    assert records.tasks.delete(user.pk, task.pk) == 0


def test_select_due_window_is_inclusive_and_skips_sent(user, now):
    inside = records.events.create(user, title="In", start_date=now, end_date=now)
    records.events.create(
        user, title="Sent", start_date=now, end_date=now, reminder_sent=True,
    )
    records.events.create(
        user, title="Late", start_date=now + timedelta(hours=3), end_date=now + timedelta(hours=3),
    )

    due = records.events.select_due(now, now + timedelta(hours=2))

    assert due == [inside]


def test_select_due_applies_extra_filters(user, now):
    records.tasks.create(user, title="Done", due_date=now, completed=True)
    open_task = records.tasks.create(user, title="Open", due_date=now)

    assert records.tasks.select_due(now, now, completed=False) == [open_task]


def test_mark_reminder_sent_flips_once(user, now):
    task = records.tasks.create(user, title="Ping", due_date=now)
    updated_at = task.updated_at

    assert records.tasks.mark_reminder_sent(task.pk) == 1
    assert records.tasks.mark_reminder_sent(task.pk) == 0

    task.refresh_from_db()
    assert task.reminder_sent is True
    assert task.updated_at == updated_at


def test_reset_reminders_can_target_one_owner(user, other_user, now):
    mine = records.events.create(user, title="A", start_date=now, end_date=now, reminder_sent=True)
    theirs = records.events.create(other_user, title="B", start_date=now, end_date=now, reminder_sent=True)

    assert records.events.reset_reminders(owner_id=user.pk) == 1

    mine.refresh_from_db()
    theirs.refresh_from_db()
    assert mine.reminder_sent is False
    assert theirs.reminder_sent is True

    assert records.events.reset_reminders() == 1


def test_event_rejects_end_before_start(user, now):
    from django.core.exceptions import ValidationError

    event = Event(owner=user, title="Backwards", start_date=now, end_date=now - timedelta(minutes=1))

    with pytest.raises(ValidationError):
        event.full_clean()
