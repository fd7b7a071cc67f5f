from django.apps import apps
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_POST


@login_required
@require_POST
def clear_reminder_history(request):
    """
    Forget which reminders this user's monitor has already shown,
    so each can fire once more.
    """
    monitors = apps.get_app_config("notifications").monitors
    cleared = monitors.clear_history(request.user.pk)

    return JsonResponse({"cleared": cleared})
