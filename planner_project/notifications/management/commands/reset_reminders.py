"""
notifications/management/commands/reset_reminders.py

Clear `reminder_sent` so the e-mail sweeps pick items up again.
Debug / test use only: the sweeps never clear the flag themselves.
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from planner.services import records

User = get_user_model()


class Command(BaseCommand):
    help = "Reset the e-mail reminder flag on tasks and/or events"

    def add_arguments(self, parser):
        parser.add_argument(
            "--user",
            help="Only reset items owned by this username",
        )
        parser.add_argument(
            "--kind",
            choices=["task", "event"],
            help="Only reset tasks or only events",
        )

    def handle(self, *args, **options):
        owner_id = None
        if options["user"]:
            try:
                owner_id = User.objects.get(username=options["user"]).pk
            except User.DoesNotExist:
                raise CommandError(f"No user named {options['user']!r}")

        stores = {
            "task": records.tasks,
            "event": records.events,
        }
        if options["kind"]:
            stores = {options["kind"]: stores[options["kind"]]}

        for kind, store in stores.items():
            count = store.reset_reminders(owner_id=owner_id)
            self.stdout.write(
                self.style.SUCCESS(f"Reset {count} {kind} reminder(s)")
            )
