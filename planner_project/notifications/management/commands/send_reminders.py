"""
notifications/management/commands/send_reminders.py

Run the e-mail reminder sweeps once, outside the scheduler
(cron, manual catch-up, debugging).

Both sweeps skip anything already flagged `reminder_sent`,
so running this alongside the scheduler never sends twice.
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.backends import EmailBackend
from notifications.services.reminders import (
    send_event_reminders,
    send_task_reminders,
)


class Command(BaseCommand):
    help = "Send due task and event reminder e-mails once"

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group()
        group.add_argument(
            "--tasks-only",
            action="store_true",
            help="Only run the task sweep",
        )
        group.add_argument(
            "--events-only",
            action="store_true",
            help="Only run the event sweep",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        email = EmailBackend.from_settings()

        if not email.is_configured:
            raise CommandError(
                "Email service not configured (set EMAIL_SERVICE, EMAIL_USER and EMAIL_PASS)"
            )

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting reminder sweeps"
            )
        )

        task_count = event_count = 0

        if not options["events_only"]:
            task_count = send_task_reminders(now=now, backend=email)

        if not options["tasks_only"]:
            event_count = send_event_reminders(now=now, backend=email)

        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{task_count} task reminders, "
                f"{event_count} event reminders"
            )
        )
