from datetime import timedelta

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from django.apps import apps
from django.utils import timezone

from notifications.models import Notification
from notifications.reminders.registry import MonitorRegistry
from planner.models import Task

pytestmark = pytest.mark.django_db


@pytest.fixture
def registry():
    # The shared scheduler is never started, so no tick runs on its own.
    registry = MonitorRegistry(scheduler=BackgroundScheduler(timezone="UTC"), interval=30)
    yield registry
    registry.shutdown()


@pytest.fixture
def app_registry(registry, monkeypatch, settings):
    settings.ENABLE_LOCAL_MONITOR = True
    monkeypatch.setattr(apps.get_app_config("notifications"), "monitors", registry)
    return registry


def due_soon(owner, title="Submit report"):
    return Task.objects.create(owner=owner, title=title, due_date=timezone.now() + timedelta(minutes=10))


def alert_titles(user):
    return list(Notification.objects.filter(recipient=user).values_list("title", flat=True))


# ============================================================
# REGISTRY
# ============================================================

def test_start_loads_the_owners_items_and_alerts(registry, user, other_user):
    task = due_soon(user)
    due_soon(other_user, title="Someone else's")

    monitor = registry.start(user)

    assert monitor.is_running
    assert len(registry) == 1
    assert alert_titles(user) == ["Task Deadline: Submit report"]
    assert alert_titles(other_user) == []

    alert = Notification.objects.get(recipient=user)
    assert (alert.item_kind, alert.item_id, alert.bucket) == ("task", task.pk, "imminent")


def test_monitors_share_the_scheduler_with_one_job_each(registry, user, other_user):
    registry.start(user)
    registry.start(other_user)
    registry.start(user)

    job_ids = sorted(job.id for job in registry._scheduler.get_jobs())
    assert job_ids == [
        f"reminder-monitor-user-{user.pk}",
        f"reminder-monitor-user-{other_user.pk}",
    ]


def test_refresh_only_touches_running_monitors(registry, user):
    assert registry.refresh(user.pk) is False

    registry.start(user)
    due_soon(user, title="Added later")

    assert registry.refresh(user.pk) is True
    assert alert_titles(user) == ["Task Deadline: Added later"]


def test_stop_keeps_the_fired_history(registry, user):
    due_soon(user)
    monitor = registry.start(user)

    assert registry.stop(user.pk) is True
    assert not monitor.is_running
    assert registry.refresh(user.pk) is False

    registry.start(user)
    assert Notification.objects.filter(recipient=user).count() == 1


def test_clear_history_lets_reminders_fire_again(registry, user):
    due_soon(user)
    assert registry.clear_history(user.pk) is False

    registry.start(user)
    assert registry.clear_history(user.pk) is True
    registry.refresh(user.pk)

    assert Notification.objects.filter(recipient=user).count() == 2


def test_stop_drops_monitors_with_nothing_to_remember(registry, user, other_user):
    due_soon(user)
    registry.start(user)
    registry.start(other_user)

    registry.stop(user.pk)
    registry.stop(other_user.pk)

    assert registry.get(user.pk) is not None
    assert registry.get(other_user.pk) is None
    assert len(registry) == 1


def test_clearing_a_stopped_monitor_drops_it(registry, user):
    due_soon(user)
    registry.start(user)
    registry.stop(user.pk)

    assert registry.clear_history(user.pk) is True
    assert registry.get(user.pk) is None


# ============================================================
# SESSION SIGNALS
# ============================================================

def test_login_starts_and_logout_stops_the_monitor(app_registry, client, user):
    client.force_login(user)

    monitor = app_registry.get(user.pk)
    assert monitor is not None
    assert monitor.is_running

    client.logout()

    assert not monitor.is_running


def test_login_without_local_monitor_setting_does_nothing(app_registry, client, user, settings):
    settings.ENABLE_LOCAL_MONITOR = False

    client.force_login(user)

    assert len(app_registry) == 0


def test_saving_a_task_refreshes_the_running_monitor(
    app_registry, client, user, django_capture_on_commit_callbacks
):
    client.force_login(user)
    assert alert_titles(user) == []

    with django_capture_on_commit_callbacks(execute=True):
        due_soon(user, title="Fresh task")

    assert alert_titles(user) == ["Task Deadline: Fresh task"]
