"""
Owner-scoped record store for tasks and events.

Every per-user operation filters on the owner so one user can never
read or change another user's records. `select_due` is the single
cross-owner query, used by the batch reminder sweeps.
"""

from accounts.models import ReminderPreference
from planner.models import Event, Task


class RecordStore:
    """CRUD over one planner model, keyed by (owner, id)."""

    def __init__(self, model, due_field):
        self.model = model
        self.due_field = due_field
        self.NotFound = model.DoesNotExist

    def __repr__(self):
        return f"<RecordStore {self.model.__name__}>"

    # =====================================================
    # PER-OWNER CRUD
    # =====================================================
    def _owned(self, owner_id):
        return self.model.objects.filter(owner_id=owner_id)

    def list(self, owner_id):
        return list(self._owned(owner_id))

    def get(self, owner_id, item_id):
        """
        Raises `NotFound` when the id is unknown or owned by someone else.
        """
        return self._owned(owner_id).get(pk=item_id)

    def create(self, owner, **fields):
        return self.model.objects.create(owner=owner, **fields)

    def update(self, owner_id, item_id, **patch):
        """
        Apply `patch` and return the number of rows changed (0 or 1).

        Goes through `save()` so `auto_now` timestamps and post_save
        receivers behave as for any other edit.
        """
        try:
            item = self.get(owner_id, item_id)
        except self.NotFound:
            return 0

        for field, value in patch.items():
            setattr(item, field, value)
        item.save()
        return 1

    def delete(self, owner_id, item_id):
        try:
            item = self.get(owner_id, item_id)
        except self.NotFound:
            return 0

        item.delete()
        return 1

    # =====================================================
    # REMINDER QUERIES (CROSS-OWNER)
    # =====================================================
    def select_due(self, start, end, *conditions, **filters):
        """
        Items whose due field lies in [start, end] and whose reminder
        has not been sent, joined with their owner and the owner's
        reminder preferences.
        """
        window = {f"{self.due_field}__range": (start, end)}

        return list(
            self.model.objects
            .select_related("owner", "owner__reminder_preference")
            .filter(*conditions, **window, **filters)
            .exclude(reminder_sent=True)
            .order_by(self.due_field)
        )

    def mark_reminder_sent(self, item_id):
        """
        Persist the batch dedup flag. Returns the number of rows changed.

        Uses a queryset update so the flag does not bump `updated_at`
        or fire save signals.
        """
        return (
            self.model.objects
            .filter(pk=item_id, reminder_sent=False)
            .update(reminder_sent=True)
        )

    def reset_reminders(self, owner_id=None):
        """
        Clear `reminder_sent` (debug / test operation only).
        """
        qs = self.model.objects.filter(reminder_sent=True)
        if owner_id is not None:
            qs = qs.filter(owner_id=owner_id)
        return qs.update(reminder_sent=False)


tasks = RecordStore(Task, due_field="due_date")
events = RecordStore(Event, due_field="start_date")


def opted_in(kind):
    """
    Condition excluding owners who switched off e-mail reminders of
    `kind`. Owners without a preference row are kept.
    """
    return ReminderPreference.opted_in(kind, path="owner__")
