from django.apps import AppConfig
from django.conf import settings
import os


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"

    monitors = None

    def ready(self):
        # --------------------------------------------------
        # Load signals (REQUIRED)
        # --------------------------------------------------
        import notifications.signals  # noqa

        # --------------------------------------------------
        # One monitor registry for the whole process
        # --------------------------------------------------
        from .reminders.registry import MonitorRegistry
        self.monitors = MonitorRegistry(interval=settings.REMINDER_MONITOR_INTERVAL)

        # --------------------------------------------------
        # Start the e-mail sweeps SAFELY
        # --------------------------------------------------
        # Under runserver's autoreloader only the child process
        # (RUN_MAIN=true) may schedule.
        if settings.DEBUG and os.environ.get("RUN_MAIN") != "true":
            return

        from .scheduler import start_scheduler
        start_scheduler()
