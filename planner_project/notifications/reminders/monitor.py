"""
Local monitor: per-session reminder alerts.

Holds one user's current tasks and events, re-classifies them on a
fixed interval and raises an interactive alert at most once per
(item, bucket). The record of what has fired lives only in memory and
disappears with the monitor.
"""

import itertools
import logging
import threading
from collections import namedtuple

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone

from notifications.reminders.predicate import (
    Channel,
    ClassificationError,
    ReminderKey,
    classify,
)
from notifications.services.messages import event_alert, task_alert

logger = logging.getLogger(__name__)


Snapshot = namedtuple("Snapshot", ["tasks", "events"])


class LocalMonitor:
    """
    Polls a snapshot of tasks/events and delivers browser-channel alerts.

    Delivery is best effort: a failed alert is retried on the next tick
    only while the item is still inside its bucket window.
    """

    def __init__(self, alerts, *, scheduler=None, interval=None, job_id=None, clock=timezone.now):
        self.alerts = alerts
        self.interval = interval or settings.REMINDER_MONITOR_INTERVAL
        self.job_id = job_id or f"reminder-monitor-{id(self):x}"
        self._clock = clock

        self._scheduler = scheduler
        self._owns_scheduler = scheduler is None
        self._job = None

        self._snapshot = Snapshot((), ())
        self._fired = set()
        # Re-entrant: an alert backend may restart or clear the monitor
        # from inside a tick.
        self._tick_lock = threading.RLock()

    def __repr__(self):
        state = "running" if self.is_running else "stopped"
        return f"<LocalMonitor {self.job_id} {state}, {len(self._fired)} fired>"

    @property
    def is_running(self):
        return self._job is not None

    @property
    def fired(self):
        return frozenset(self._fired)

    # =====================================================
    # LIFECYCLE
    # =====================================================
    def start_monitoring(self, tasks, events):
        """
        Replace the snapshot, (re)start the timer and run one pass now.

        Calling this again never leaves more than one timer behind.
        """
        self._snapshot = Snapshot(tuple(tasks), tuple(events))
        self._cancel_timer()

        scheduler = self._ensure_scheduler()
        self._job = scheduler.add_job(
            self.scheduled_tick,
            trigger="interval",
            seconds=self.interval,
            id=self.job_id,
            replace_existing=True,
            max_instances=1,      # a slow tick is skipped, never doubled
            coalesce=True,
        )

        logger.info(
            "Monitoring %d task(s) and %d event(s) every %ss [%s]",
            len(self._snapshot.tasks), len(self._snapshot.events),
            self.interval, self.job_id,
        )

        self.tick()

    def stop_monitoring(self):
        """Cancel the timer. A tick already running is left to finish."""
        if self._job is None:
            return

        self._cancel_timer()

        if self._owns_scheduler and self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None

        logger.info("Stopped reminder monitor [%s]", self.job_id)

    def clear_history(self):
        """Forget every fired reminder so each may fire once more."""
        with self._tick_lock:
            self._fired.clear()

    def _ensure_scheduler(self):
        if self._scheduler is None:
            self._scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)

        if self._owns_scheduler and not self._scheduler.running:
            self._scheduler.start()

        return self._scheduler

    def _cancel_timer(self):
        job, self._job = self._job, None
        if job is None:
            return

        try:
            self._scheduler.remove_job(job.id)
        except JobLookupError:
            pass

    # =====================================================
    # TICK
    # =====================================================
    def scheduled_tick(self):
        """
        Timer entry point. Runs on a scheduler worker thread, which
        never sees request signals, so stale connections are dropped here.
        """
        close_old_connections()
        try:
            return self.tick()
        finally:
            close_old_connections()

    def tick(self, now=None):
        """
        Classify every item once and deliver what is due.

        The snapshot is captured up front: a concurrent
        `start_monitoring` only affects the next tick.
        Returns the number of alerts delivered.
        """
        snapshot = self._snapshot
        now = now or self._clock()

        delivered = 0
        with self._tick_lock:
            for item in itertools.chain(snapshot.tasks, snapshot.events):
                if self._process(now, item):
                    delivered += 1

        return delivered

    def _process(self, now, item):
        try:
            fire = classify(now, item)
        except ClassificationError as exc:
            logger.warning("Skipping %r this cycle: %s", item, exc)
            return False

        if fire is None or fire.channel != Channel.BROWSER:
            return False

        key = ReminderKey.for_item(item, fire.bucket)
        if key in self._fired:
            return False

        try:
            if key.kind == "task":
                title, body = task_alert(item, fire.bucket, now)
            else:
                title, body = event_alert(item, now)
            delivered = self.alerts.deliver(title, body, key=key)
        except Exception:
            logger.exception("Alert delivery raised for %s", key)
            return False

        if not delivered:
            logger.warning("Alert delivery failed for %s", key)
            return False

        self._fired.add(key)
        return True
