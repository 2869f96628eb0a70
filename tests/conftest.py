"""
Shared fixtures for the activity_notification tests.

- users acting as notification targets
- notifications attached to them
- ``use_templates``: swaps the template engine for an in-memory loader
"""
from types import SimpleNamespace

import pytest
from django.contrib.auth.models import Group, User

from activity_notification.helpers import ViewContext
from activity_notification.models import Notification


@pytest.fixture
def user(db):
    return User.objects.create_user(username="alice", password="secret")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="bob", password="secret")


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(username="staff", password="secret", is_staff=True)


@pytest.fixture
def group(db):
    """Plain notifiable object (no get_absolute_url)."""
    return Group.objects.create(name="Lecteurs")


@pytest.fixture
def make_notification(group, other_user):
    def _make(target, key="default", **kwargs):
        kwargs.setdefault("notifiable", group)
        kwargs.setdefault("notifier", other_user)
        return Notification.objects.create(target=target, key=key, **kwargs)

    return _make


@pytest.fixture
def view():
    return ViewContext()


@pytest.fixture
def use_templates(settings):
    """use_templates({"name.html": "source"}) -> only these templates exist."""

    def _use(templates):
        settings.TEMPLATES = [
            {
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "DIRS": [],
                "APP_DIRS": False,
                "OPTIONS": {
                    "context_processors": ["django.template.context_processors.request"],
                    "loaders": [("django.template.loaders.locmem.Loader", dict(templates))],
                },
            }
        ]

    return _use


class StubNotification:
    """Anything with a render(view, options) method, records what it got."""

    def __init__(self, name, on_render=None):
        self.name = name
        self.on_render = on_render
        self.calls = []

    def render(self, view, options):
        self.calls.append(dict(options))
        if self.on_render:
            self.on_render(view, options)
        return f"<{self.name}>"


@pytest.fixture
def stub():
    return StubNotification


@pytest.fixture
def route_stub():
    """Notification-like object for route helpers (no database needed)."""

    def _make(target_pk=7, pk=5, target=None):
        return SimpleNamespace(pk=pk, target=target if target is not None else User(pk=target_pk))

    return _make
