from smtplib import SMTPException

import pytest
from django.core import mail
from django.db import DatabaseError

from notifications.backends import EmailBackend, InAppAlertBackend
from notifications.models import Notification
from notifications.reminders.predicate import Bucket, ReminderKey


def configured_backend():
    return EmailBackend(
        service="gmail",
        user="planner@example.com",
        password="app-password",
    )


# ============================================================
# E-MAIL
# ============================================================

@pytest.mark.parametrize("missing", ["EMAIL_SERVICE", "EMAIL_HOST_USER", "EMAIL_HOST_PASSWORD"])
def test_any_missing_credential_means_not_configured(email_settings, missing):
    setattr(email_settings, missing, "")

    assert EmailBackend.from_settings().is_configured is False


def test_from_settings_reads_credentials(email_settings):
    backend = EmailBackend.from_settings()

    assert backend.is_configured
    assert backend.service == "gmail"
    assert backend.from_email == "planner@example.com"


def test_unconfigured_backend_reports_failure_without_sending():
    backend = EmailBackend()

    assert backend.send("ada@example.com", "Subject", "<p>Body</p>") is False
    assert mail.outbox == []


def test_send_delivers_html_with_text_alternative():
    assert configured_backend().send("ada@example.com", "Hello", "<p>Due <b>soon</b></p>") is True

    message = mail.outbox[0]
    assert message.from_email == "planner@example.com"
    assert message.body == "Due soon"
    assert message.alternatives[0][0] == "<p>Due <b>soon</b></p>"


def test_send_without_recipient_fails():
    assert configured_backend().send("", "Hello", "<p>Hi</p>") is False
    assert mail.outbox == []


def test_smtp_errors_are_reported_not_raised(monkeypatch):
    def broken_send_mail(**kwargs):
        raise SMTPException("535 Authentication failed")

    monkeypatch.setattr("notifications.backends.email.send_mail", broken_send_mail)

    assert configured_backend().send("ada@example.com", "Hello", "<p>Hi</p>") is False


# ============================================================
# IN-APP ALERTS
# ============================================================

@pytest.mark.django_db
def test_alert_is_stored_as_reminder_notification(user):
    assert InAppAlertBackend(user).deliver("Task Deadline: Pay rent", "Due in 5 minutes") is True

    notification = Notification.objects.get(recipient=user)
    assert notification.category == Notification.Category.REMINDER
    assert notification.priority == Notification.Priority.WARNING
    assert notification.title == "Task Deadline: Pay rent"
    assert notification.message == "Due in 5 minutes"
    assert notification.is_read is False


@pytest.mark.django_db
def test_database_failure_is_reported(user, monkeypatch):
    def refuse(**kwargs):
        raise DatabaseError("database is locked")

    monkeypatch.setattr(Notification.objects, "create", refuse)

    assert InAppAlertBackend(user).deliver("Title", "Body") is False


@pytest.mark.django_db
def test_alert_records_the_reminder_it_came_from(user):
    key = ReminderKey("event", "evt-1", Bucket.LEAD)

    InAppAlertBackend(user).deliver("Event Reminder: Demo", "Starting in 15 minutes", key=key)

    notification = Notification.objects.get(recipient=user)
    assert (notification.item_kind, notification.item_id, notification.bucket) == ("event", "evt-1", "lead")


@pytest.mark.django_db
def test_mark_all_as_read(user, other_user):
    InAppAlertBackend(user).deliver("One", "")
    InAppAlertBackend(user).deliver("Two", "")
    InAppAlertBackend(other_user).deliver("Theirs", "")

    assert Notification.mark_all_as_read(user) == 2
    assert Notification.objects.filter(is_read=False).count() == 1
    assert Notification.objects.filter(recipient=user, read_at__isnull=True).count() == 0
