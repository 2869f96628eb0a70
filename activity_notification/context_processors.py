from .targets import get_target_type, is_target


def unopened_notification_count(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated and is_target(user)):
        return {}
    return {
        "unopened_notification_count": get_target_type(user).notifications(user).unopened_only().count()
    }
