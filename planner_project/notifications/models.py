from django.conf import settings
from django.db import models
from django.utils import timezone


class Notification(models.Model):
    """
    An in-app alert shown to one user.

    Reminder alerts are written by the local monitor; the row's existence
    is the confirmation that the alert was delivered. `item_kind`,
    `item_id` and `bucket` point back at the task or event that fired.
    """

    class Category(models.TextChoices):
        REMINDER = "reminder", "Reminder"
        SYSTEM = "system", "System"

    class Priority(models.TextChoices):
        INFO = "info", "Info"
        WARNING = "warning", "Warning"
        DANGER = "danger", "Danger"

    class ItemKind(models.TextChoices):
        TASK = "task", "Task"
        EVENT = "event", "Event"

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.REMINDER,
    )
    priority = models.CharField(
        max_length=20,
        choices=Priority.choices,
        default=Priority.INFO,
    )

    title = models.CharField(max_length=200)
    message = models.TextField(blank=True)

    # =====================================================
    # REMINDER SOURCE (blank for system notices)
    # =====================================================
    item_kind = models.CharField(max_length=10, choices=ItemKind.choices, blank=True)
    item_id = models.CharField(max_length=64, blank=True)
    bucket = models.CharField(max_length=20, blank=True)

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
            models.Index(fields=["item_kind", "item_id"], name="notif_item_idx"),
        ]

    def __str__(self):
        return f"{self.recipient} | {self.get_category_display()} | {self.title}"

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at"])

    @classmethod
    def mark_all_as_read(cls, user):
        """Mark every unread alert of `user` as read; returns the count."""
        return (
            cls.objects
            .filter(recipient=user, is_read=False)
            .update(is_read=True, read_at=timezone.now())
        )
