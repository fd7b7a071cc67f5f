import logging

from django.db import DatabaseError

from notifications.models import Notification

logger = logging.getLogger(__name__)


class InAppAlertBackend:
    """
    Interactive alerts shown in the recipient's notification list.

    `deliver()` reports whether the alert was stored, so the local
    monitor only records a reminder as fired once it really exists.
    """

    def __init__(self, recipient, priority=Notification.Priority.WARNING):
        self.recipient = recipient
        self.priority = priority

    def __repr__(self):
        return f"<InAppAlertBackend for {self.recipient}>"

    def deliver(self, title, body, key=None):
        """
        Store the alert. `key` (a ReminderKey) links it to the item that fired.
        """
        source = {}
        if key is not None:
            source = {"item_kind": key.kind, "item_id": key.item_id, "bucket": str(key.bucket)}

        try:
            Notification.objects.create(
                recipient=self.recipient,
                category=Notification.Category.REMINDER,
                priority=self.priority,
                title=title[:200],
                message=body,
                **source,
            )
        except DatabaseError:
            logger.exception("Could not store alert %r for user %s", title, self.recipient.pk)
            return False

        return True
