import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings

from notifications.backends import InAppAlertBackend
from notifications.reminders.monitor import LocalMonitor
from planner.services import records

logger = logging.getLogger(__name__)


class MonitorRegistry:
    """
    The local monitors of all signed-in users.

    Built once when the notifications app is ready and reached through
    its app config. All monitors share one background scheduler, which
    is only started when the first monitor is.
    """

    def __init__(self, scheduler=None, interval=None, alert_backend=InAppAlertBackend):
        self.interval = interval
        self.alert_backend = alert_backend

        self._scheduler = scheduler
        self._owns_scheduler = scheduler is None
        self._monitors = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._monitors)

    def get(self, owner_id):
        return self._monitors.get(owner_id)

    def _scheduler_for_monitors(self):
        if self._scheduler is None:
            self._scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)

        if self._owns_scheduler and not self._scheduler.running:
            self._scheduler.start()

        return self._scheduler

    def _monitor_for(self, user):
        with self._lock:
            monitor = self._monitors.get(user.pk)
            if monitor is None:
                monitor = LocalMonitor(
                    self.alert_backend(user),
                    scheduler=self._scheduler_for_monitors(),
                    interval=self.interval,
                    job_id=f"reminder-monitor-user-{user.pk}",
                )
                self._monitors[user.pk] = monitor
            return monitor

    @staticmethod
    def _snapshot(owner_id):
        return records.tasks.list(owner_id), records.events.list(owner_id)

    # =====================================================
    # SESSION HOOKS
    # =====================================================
    def start(self, user):
        monitor = self._monitor_for(user)
        monitor.start_monitoring(*self._snapshot(user.pk))
        return monitor

    def refresh(self, owner_id):
        """
        Reload a running monitor's snapshot after the owner's data changed.
        """
        monitor = self._monitors.get(owner_id)
        if monitor is None or not monitor.is_running:
            return False

        monitor.start_monitoring(*self._snapshot(owner_id))
        return True

    def stop(self, owner_id):
        """
        Stop the owner's timer.

        A stopped monitor is kept only while it remembers fired
        reminders, so a new session does not repeat them; the registry
        therefore holds at most one monitor per user who has been alerted
        since start-up. Idle monitors are dropped.
        """
        monitor = self._monitors.get(owner_id)
        if monitor is None:
            return False

        monitor.stop_monitoring()
        self._evict_if_idle(owner_id)
        return True

    def clear_history(self, owner_id):
        monitor = self._monitors.get(owner_id)
        if monitor is None:
            return False

        monitor.clear_history()
        self._evict_if_idle(owner_id)
        return True

    def _evict_if_idle(self, owner_id):
        with self._lock:
            monitor = self._monitors.get(owner_id)
            if monitor is not None and not monitor.is_running and not monitor.fired:
                del self._monitors[owner_id]

    def shutdown(self):
        for monitor in list(self._monitors.values()):
            monitor.stop_monitoring()

        if self._owns_scheduler and self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Reminder monitor scheduler shut down")
