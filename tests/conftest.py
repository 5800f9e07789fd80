"""
Shared fixtures for the test suite.
Fixtures defined here are available to all tests in the project.
"""

import itertools
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from battlex.celery import app as celery_app
from tournaments.models import Tournament
from wallet.models import Wallet

User = get_user_model()

_phone_numbers = itertools.count(9876600001)
_titles = itertools.count(1)


@pytest.fixture(autouse=True)
def override_settings(settings):
    """
    Override Django settings for the test environment.
    Runs for every test so mail stays in memory and Celery tasks run inline.
    """
    settings.PASSWORD_HASHERS = [
        'django.contrib.auth.hashers.MD5PasswordHasher',
    ]
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
    settings.EMAIL_HOST_USER = 'battlex@example.com'
    celery_app.conf.task_always_eager = True


@pytest.fixture(autouse=True)
def clear_throttle_cache():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """A pytest fixture that provides an instance of DRF's APIClient."""
    return APIClient()


@pytest.fixture
def user_factory(db):
    """A pytest fixture (factory) to create a user, optionally with a funded wallet."""

    def _create_user(balance=None, **kwargs):
        number = next(_phone_numbers)
        defaults = {
            "username": f"player{number}",
            "password": "password",
            "phone_number": f"+91{number}",
        }
        defaults.update(kwargs)
        user = User.objects.create_user(**defaults)
        if balance is not None:
            # The wallet is created by a signal; seed it directly.
            Wallet.objects.filter(user=user).update(balance=Decimal(balance))
            user.wallet.refresh_from_db()
        return user

    return _create_user


@pytest.fixture
def default_user(user_factory):
    """A fixture to get a standard user instance."""
    return user_factory(username="testuser", phone_number="+919876543210")


@pytest.fixture
def admin_user(user_factory):
    """A fixture to create an admin user."""
    return user_factory(
        username="adminuser",
        is_staff=True,
        is_superuser=True,
    )


@pytest.fixture
def authenticated_admin_client(api_client, admin_user):
    """A pytest fixture for an authenticated client with an admin user."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def tournament_factory(db):
    """A pytest fixture (factory) to create a tournament; two seats and a fee of 10 by default."""

    def _create_tournament(**kwargs):
        defaults = {
            "title": f"Free Fire Cup #{next(_titles)}",
            "date": "2026-11-01",
            "time": "18:00",
            "entry_fee": Decimal("10.00"),
            "max_players": 2,
            "room_id": "ROOM-1",
            "room_password": "secret",
            "prize_pool": Decimal("100.00"),
        }
        defaults.update(kwargs)
        return Tournament.objects.create(**defaults)

    return _create_tournament


@pytest.fixture
def tournament(tournament_factory):
    return tournament_factory()
