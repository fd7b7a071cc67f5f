import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone


def new_item_id():
    return uuid.uuid4().hex


class Task(models.Model):
    """
    A to-do item owned by exactly one user.

    `reminder_sent` is the batch sweep's dedup flag: it flips to True
    once an e-mail reminder has been confirmed delivered and is only
    cleared again by an explicit reset.
    """

    reminder_kind = "task"

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=new_item_id,
        editable=False,
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tasks",
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    completed = models.BooleanField(default=False, db_index=True)

    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )

    due_date = models.DateTimeField(null=True, blank=True, db_index=True)

    reminder_sent = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["owner", "completed"], name="planner_task_owner_done_idx"),
        ]

    def __str__(self):
        return self.title


class Event(models.Model):
    """
    A calendar entry owned by exactly one user.

    The notification columns describe when and how the owner wants to be
    reminded: at `start_date - lead_minutes`, through `notification_channel`.
    With `notifications_enabled` off the event never produces a reminder.
    """

    reminder_kind = "event"

    class Channel(models.TextChoices):
        BROWSER = "browser", "Browser"
        EMAIL = "email", "Email"

    id = models.CharField(
        primary_key=True,
        max_length=64,
        default=new_item_id,
        editable=False,
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="events",
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    start_date = models.DateTimeField(db_index=True)
    end_date = models.DateTimeField()
    all_day = models.BooleanField(default=False)
    category = models.CharField(max_length=50, blank=True)

    # =====================================================
    # NOTIFICATION CONFIGURATION
    # =====================================================
    notifications_enabled = models.BooleanField(default=True)
    lead_minutes = models.PositiveIntegerField(default=15)
    notification_channel = models.CharField(
        max_length=10,
        choices=Channel.choices,
        default=Channel.BROWSER,
    )

    reminder_sent = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["start_date"]
        indexes = [
            models.Index(fields=["owner", "start_date"], name="planner_event_owner_start_idx"),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": "An event cannot end before it starts."})
