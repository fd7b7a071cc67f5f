from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from django.conf import settings
from django.db import close_old_connections
from django.utils import timezone
import logging

from notifications.backends import EmailBackend
from notifications.services.reminders import (
    send_event_reminders,
    send_task_reminders,
)

logger = logging.getLogger(__name__)

# ============================================================
# GLOBAL SAFETY LOCK
# Prevents the sweep scheduler from starting more than once
# ============================================================
_scheduler = None


def build_sweep_scheduler(email, scheduler=None):
    """
    Register the two reminder sweeps on `scheduler` (a new
    BackgroundScheduler by default) without starting it.

    Returns None when e-mail is not configured: the sweeps are then
    never scheduled at all.
    """
    if not email.is_configured:
        logger.info("Email service not configured - reminder sweeps disabled")
        return None

    if scheduler is None:
        scheduler = BackgroundScheduler(timezone=settings.TIME_ZONE)

    # --------------------------------------------
    # TASKS: HOURLY, ON THE HOUR
    # --------------------------------------------
    scheduler.add_job(
        run_task_sweep,
        trigger=CronTrigger(minute=0, timezone=settings.TIME_ZONE),
        kwargs={"email": email},
        id="send_task_reminders",
        replace_existing=True,
        max_instances=1,      # Prevent overlapping runs
        coalesce=True,        # Merge missed runs if server was down
    )

    # --------------------------------------------
    # EVENTS: EVERY 30 MINUTES
    # --------------------------------------------
    scheduler.add_job(
        run_event_sweep,
        trigger=CronTrigger(minute="*/30", timezone=settings.TIME_ZONE),
        kwargs={"email": email},
        id="send_event_reminders",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    return scheduler


def start_scheduler(email=None):
    """
    Start the reminder sweeps.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    - Checks e-mail configuration once; unconfigured means no sweeps
    """
    global _scheduler

    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("Reminder scheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    if _scheduler is not None:
        logger.info("Reminder scheduler already running, skipping initialization")
        return _scheduler

    scheduler = build_sweep_scheduler(email or EmailBackend.from_settings())
    if scheduler is None:
        return None

    scheduler.start()
    _scheduler = scheduler

    logger.info(
        "Reminder scheduler started: task sweep hourly, event sweep every 30 minutes"
    )
    return _scheduler


def shutdown_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    if _scheduler.running:
        _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("Reminder scheduler stopped")


def run_task_sweep(email):
    """
    Scheduled wrapper. Keeps the sweep logic in the service layer.
    """
    close_old_connections()
    now = timezone.now()
    logger.info(f"Checking for task reminders at {now:%Y-%m-%d %H:%M:%S}")
    return send_task_reminders(now=now, backend=email)


def run_event_sweep(email):
    close_old_connections()
    now = timezone.now()
    logger.info(f"Checking for event reminders at {now:%Y-%m-%d %H:%M:%S}")
    return send_event_reminders(now=now, backend=email)
