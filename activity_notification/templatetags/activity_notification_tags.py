from django import template

from .. import helpers

register = template.Library()


def _view(context):
    return helpers.ViewContext.from_context(context)


@register.simple_tag(takes_context=True)
def render_notification(context, notifications, **options):
    """{% render_notification notification partial="custom" fallback="text" %}"""
    return helpers.render_notification(_view(context), notifications, options) or ""


@register.simple_tag(takes_context=True)
def render_notifications(context, notifications, **options):
    return helpers.render_notifications(_view(context), notifications, options) or ""


@register.simple_tag(takes_context=True)
def render_notification_of(context, target, **options):
    """{% render_notification_of request.user index_content="simple" layout="dropdown" %}"""
    return helpers.render_notification_of(_view(context), target, options) or ""


@register.simple_tag(takes_context=True)
def render_notifications_of(context, target, **options):
    return helpers.render_notifications_of(_view(context), target, options) or ""


# Routes: les paramètres nommés deviennent la query string
@register.simple_tag
def notification_path_for(notification, **params):
    return helpers.notification_path_for(notification, params)


@register.simple_tag
def move_notification_path_for(notification, **params):
    return helpers.move_notification_path_for(notification, params)


@register.simple_tag
def open_notification_path_for(notification, **params):
    return helpers.open_notification_path_for(notification, params)


@register.simple_tag
def open_all_notifications_path_for(target, **params):
    return helpers.open_all_notifications_path_for(target, params)


@register.simple_tag(takes_context=True)
def notification_url_for(context, notification, **params):
    return helpers.notification_url_for(notification, params, request=context.get("request"))


@register.simple_tag(takes_context=True)
def move_notification_url_for(context, notification, **params):
    return helpers.move_notification_url_for(notification, params, request=context.get("request"))


@register.simple_tag(takes_context=True)
def open_notification_url_for(context, notification, **params):
    return helpers.open_notification_url_for(notification, params, request=context.get("request"))


@register.simple_tag(takes_context=True)
def open_all_notifications_url_for(context, target, **params):
    return helpers.open_all_notifications_url_for(target, params, request=context.get("request"))
