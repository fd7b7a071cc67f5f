from django.contrib import admin

from .models import Event, Task


# ============================================================
# TASKS
# ============================================================

@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "owner",
        "priority",
        "due_date",
        "completed",
        "reminder_sent",
    )

    list_filter = (
        "priority",
        "completed",
        "reminder_sent",
    )

    search_fields = (
        "title",
        "description",
        "owner__username",
    )

    ordering = ("due_date",)
    list_per_page = 25

    actions = ("reset_reminder",)

    @admin.action(description="Allow the e-mail reminder to be sent again")
    def reset_reminder(self, request, queryset):
        queryset.update(reminder_sent=False)


# ============================================================
# EVENTS
# ============================================================

@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "owner",
        "start_date",
        "end_date",
        "all_day",
        "notifications_enabled",
        "notification_channel",
        "reminder_sent",
    )

    list_filter = (
        "all_day",
        "notifications_enabled",
        "notification_channel",
        "reminder_sent",
    )

    search_fields = (
        "title",
        "description",
        "category",
        "owner__username",
    )

    fieldsets = (
        ("Event", {
            "fields": ("owner", "title", "description", "category"),
        }),
        ("Schedule", {
            "fields": ("start_date", "end_date", "all_day"),
        }),
        ("Reminder", {
            "fields": (
                "notifications_enabled",
                "lead_minutes",
                "notification_channel",
                "reminder_sent",
            ),
        }),
    )

    ordering = ("start_date",)
    list_per_page = 25

    actions = ("reset_reminder",)

    @admin.action(description="Allow the e-mail reminder to be sent again")
    def reset_reminder(self, request, queryset):
        queryset.update(reminder_sent=False)
