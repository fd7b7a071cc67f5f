from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import ReminderPreference

User = get_user_model()


# ============================================================
# USER ADMIN (WITH REMINDER PREFERENCES INLINE)
# ============================================================

class ReminderPreferenceInline(admin.StackedInline):
    """
    One preference row per user.
    """
    model = ReminderPreference
    extra = 0
    max_num = 1
    can_delete = False


admin.site.unregister(User)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    inlines = (ReminderPreferenceInline,)


# ============================================================
# REMINDER PREFERENCES
# ============================================================

@admin.register(ReminderPreference)
class ReminderPreferenceAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "email_notifications",
        "task_reminders",
        "event_reminders",
        "timezone",
        "updated_at",
    )

    list_filter = (
        "email_notifications",
        "task_reminders",
        "event_reminders",
    )

    search_fields = (
        "user__username",
        "user__email",
    )
