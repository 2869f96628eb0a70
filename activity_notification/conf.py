# activity_notification/conf.py
from django.conf import settings

DEFAULTS = {
    "TARGETS": [],
    "VIEW_ROOT": "activity_notification/notifications",
    "DEFAULT_TARGET_VIEW": "default",
    "LAYOUT_ROOT": "layouts",
    "TEMPLATE_SUFFIX": ".html",
    "INDEX_LIMIT": None,
    "BASE_URL": "",
}


def get(name):
    """Lit ACTIVITY_NOTIFICATION[name] avec repli sur DEFAULTS."""
    user = getattr(settings, "ACTIVITY_NOTIFICATION", None) or {}
    return user.get(name, DEFAULTS[name])


def target_view_root(resources_name):
    return f"{get('VIEW_ROOT')}/{resources_name}"


def default_view_root():
    return target_view_root(get("DEFAULT_TARGET_VIEW"))
