from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Notification


PRIORITY_COLORS = {
    Notification.Priority.INFO: "#2563eb",
    Notification.Priority.WARNING: "#f59e0b",
    Notification.Priority.DANGER: "#dc2626",
}


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Delivered in-app alerts, with the task or event each reminder came from.
    """

    list_display = (
        "colored_title",
        "recipient",
        "item_kind",
        "bucket",
        "is_read",
        "created_at",
    )

    list_filter = (
        "category",
        "item_kind",
        "bucket",
        "is_read",
    )

    search_fields = (
        "title",
        "message",
        "item_id",
        "recipient__username",
    )

    fieldsets = (
        (None, {
            "fields": ("recipient", "category", "priority", "title", "message"),
        }),
        ("Reminder source", {
            "fields": ("item_kind", "item_id", "bucket"),
        }),
        ("State", {
            "fields": ("is_read", "read_at", "created_at"),
        }),
    )

    readonly_fields = ("read_at", "created_at")
    date_hierarchy = "created_at"
    list_per_page = 25

    actions = ("mark_as_read", "mark_as_unread")

    @admin.display(description="Title", ordering="title")
    def colored_title(self, obj):
        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            PRIORITY_COLORS.get(obj.priority, "#000000"),
            obj.title,
        )

    # =====================================================
    # ACTIONS
    # =====================================================
    @admin.action(description="Mark selected alerts as read")
    def mark_as_read(self, request, queryset):
        queryset.filter(is_read=False).update(is_read=True, read_at=timezone.now())

    @admin.action(description="Mark selected alerts as unread")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False, read_at=None)
