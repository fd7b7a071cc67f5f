import pytest
from django.urls import reverse

from notifications.models import Notification
from planner.models import Task

pytestmark = pytest.mark.django_db


@pytest.mark.parametrize(
    "url_name",
    [
        "admin:notifications_notification_changelist",
        "admin:planner_task_changelist",
        "admin:planner_event_changelist",
        "admin:accounts_reminderpreference_changelist",
        "admin:auth_user_changelist",
    ],
)
def test_changelists_render(admin_client, url_name):
    assert admin_client.get(reverse(url_name)).status_code == 200


def test_notification_title_is_coloured_by_priority(admin_client, user):
    Notification.objects.create(
        recipient=user,
        category=Notification.Category.REMINDER,
        priority=Notification.Priority.DANGER,
        title="Overdue <script>",
        message="",
    )

    content = admin_client.get(reverse("admin:notifications_notification_changelist")).content.decode()

    assert "#dc2626" in content
    assert "Overdue &lt;script&gt;" in content


def test_reset_reminder_action(admin_client, user):
    task = Task.objects.create(owner=user, title="Water plants", reminder_sent=True)

    admin_client.post(
        reverse("admin:planner_task_changelist"),
        {"action": "reset_reminder", "_selected_action": [task.pk]},
    )

    task.refresh_from_db()
    assert task.reminder_sent is False
