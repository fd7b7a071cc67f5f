from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone as dj_timezone


class ReminderPreference(models.Model):
    """
    Per-user switches for reminder delivery.

    A user without a row gets the defaults (everything enabled),
    so the batch sweeps only ever exclude users who opted out.
    """

    # reminder kind -> its e-mail switch
    EMAIL_SWITCHES = {
        "task": "task_reminders",
        "event": "event_reminders",
    }

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reminder_preference",
    )

    email_notifications = models.BooleanField(default=True)
    task_reminders = models.BooleanField(default=True)
    event_reminders = models.BooleanField(default=True)

    # Dates in reminder e-mails are shown in this zone.
    timezone = models.CharField(max_length=64, default="UTC")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Reminder preferences for {self.user}"

    @classmethod
    def for_user(cls, user):
        """
        Return the user's preferences, or unsaved defaults.

        Reads the `reminder_preference` relation, so a queryset that
        selected it costs no extra query.
        """
        try:
            return user.reminder_preference
        except cls.DoesNotExist:
            return cls(user=user)

    @classmethod
    def opted_in(cls, kind, path=""):
        """
        Condition keeping users who take e-mail reminders of `kind`.

        `path` is the lookup from the queried model to the user
        (e.g. "owner__"). Users without a row are kept.
        """
        try:
            switch = cls.EMAIL_SWITCHES[kind]
        except KeyError:
            raise ValueError(f"Unknown reminder kind: {kind!r}") from None

        prefix = f"{path}reminder_preference__"
        return (
            ~Q(**{f"{prefix}email_notifications": False})
            & ~Q(**{f"{prefix}{switch}": False})
        )

    @property
    def zone(self):
        """The preferred zone; unknown names fall back to TIME_ZONE."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return dj_timezone.get_default_timezone()
