"""
notifications/signals/monitoring.py

Ties local reminder monitors to user sessions:
login starts one, logout stops it, and edits to the owner's
tasks or events reload its snapshot.
"""

from django.apps import apps
from django.conf import settings
from django.contrib.auth.signals import user_logged_in, user_logged_out
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from planner.models import Event, Task


def monitor_registry():
    return apps.get_app_config("notifications").monitors


# ============================================================
# SESSION START / END
# ============================================================

@receiver(user_logged_in)
def start_reminder_monitor(sender, request, user, **kwargs):
    if not getattr(settings, "ENABLE_LOCAL_MONITOR", False):
        return

    monitor_registry().start(user)


@receiver(user_logged_out)
def stop_reminder_monitor(sender, request, user, **kwargs):
    if user is None:
        return

    monitor_registry().stop(user.pk)


# ============================================================
# SNAPSHOT REFRESH
# ============================================================

@receiver(post_save, sender=Task)
@receiver(post_save, sender=Event)
@receiver(post_delete, sender=Task)
@receiver(post_delete, sender=Event)
def refresh_reminder_monitor(sender, instance, **kwargs):
    """
    Reload the owner's running monitor once the change is committed.
    """
    owner_id = instance.owner_id
    transaction.on_commit(lambda: monitor_registry().refresh(owner_id))
