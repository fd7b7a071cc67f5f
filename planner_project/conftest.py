from datetime import datetime, timezone as dt_timezone

import pytest


NOW = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture(autouse=True)
def no_background_threads(settings):
    """Tests drive schedulers and monitors by hand."""
    settings.ENABLE_LOCAL_MONITOR = False
    settings.ENABLE_SCHEDULER = False


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def email_settings(settings):
    settings.EMAIL_SERVICE = "gmail"
    settings.EMAIL_HOST_USER = "planner@example.com"
    settings.EMAIL_HOST_PASSWORD = "app-password"
    settings.DEFAULT_FROM_EMAIL = "planner@example.com"
    return settings


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(
        username="ada",
        password="pw",
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
    )


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(
        username="grace",
        password="pw",
        email="grace@example.com",
    )
