from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    path(
        "reminders/clear-history/",
        views.clear_reminder_history,
        name="clear_reminder_history",
    ),
]
