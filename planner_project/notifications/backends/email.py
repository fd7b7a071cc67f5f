import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils.html import strip_tags

logger = logging.getLogger(__name__)


class EmailBackend:
    """
    E-mail delivery for the batch reminder sweeps.

    "Not configured" (missing service, user or password) is decided once,
    when the backend is built, and is distinct from "configured but the
    send failed". `send()` never raises: it reports success as a bool.
    """

    def __init__(self, service="", user="", password="", from_email=None, connection=None):
        self.service = service
        self.user = user
        self.password = password
        self.from_email = from_email or user
        self.connection = connection

    @classmethod
    def from_settings(cls):
        return cls(
            service=getattr(settings, "EMAIL_SERVICE", ""),
            user=getattr(settings, "EMAIL_HOST_USER", ""),
            password=getattr(settings, "EMAIL_HOST_PASSWORD", ""),
            from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        )

    @property
    def is_configured(self):
        return bool(self.service and self.user and self.password)

    def __repr__(self):
        state = "configured" if self.is_configured else "not configured"
        return f"<EmailBackend {self.service or '-'} ({state})>"

    def send(self, to, subject, html):
        if not self.is_configured:
            logger.info("Email service not configured, not sending %r", subject)
            return False

        if not to:
            logger.warning("No recipient address for %r", subject)
            return False

        try:
            sent = send_mail(
                subject=subject,
                message=strip_tags(html),
                from_email=self.from_email,
                recipient_list=[to],
                html_message=html,
                fail_silently=False,
                connection=self.connection,
            )
        except Exception:
            logger.exception("Failed to send %r to %s", subject, to)
            return False

        if not sent:
            logger.warning("Mail backend accepted no message for %s (%r)", to, subject)
            return False

        logger.info("Email sent to %s: %r", to, subject)
        return True
