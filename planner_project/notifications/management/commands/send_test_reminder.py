from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from notifications.backends import EmailBackend
from notifications.services.preview import send_test_reminder

User = get_user_model()


class Command(BaseCommand):
    help = "Send a sample task or event reminder e-mail to a user"

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument(
            "--kind",
            choices=["task", "event"],
            default="task",
        )

    def handle(self, *args, **options):
        try:
            user = User.objects.get(username=options["username"])
        except User.DoesNotExist:
            raise CommandError(f"No user named {options['username']!r}")

        if not user.email:
            raise CommandError(f"User {user.get_username()!r} has no e-mail address")

        email = EmailBackend.from_settings()
        if not email.is_configured:
            raise CommandError("Failed to send notification. Check email configuration.")

        if not send_test_reminder(user, options["kind"], backend=email):
            raise CommandError("Failed to send notification. Check email configuration.")

        self.stdout.write(self.style.SUCCESS("Test notification sent successfully"))
