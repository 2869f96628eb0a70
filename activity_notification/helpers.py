# activity_notification/helpers.py
"""
Helpers de vue: rendu des notifications et construction de leurs routes.

    view = ViewContext(request)
    html = render_notification_of(view, request.user, {"index_content": "simple"})

``render_notification_of`` remplit le slot ``notification_index`` de la vue
puis rend ``activity_notification/notifications/<cibles>/index`` (repli sur
``.../default/index``), où le slot est lu via
``{{ content_for.notification_index }}``.
"""
import logging
import os

from django.template import TemplateDoesNotExist
from django.template.loader import get_template, select_template
from django.utils.safestring import mark_safe

from . import conf
from .models import Notification
from .targets import get_target_type, is_target

logger = logging.getLogger(__name__)

NOTIFICATION_INDEX_SLOT = "notification_index"


def template_name(path):
    """Ajoute le suffixe des templates (".html") si le chemin n'a pas d'extension."""
    path = str(path)
    if os.path.splitext(path)[1]:
        return path
    return f"{path}{conf.get('TEMPLATE_SUFFIX')}"


class ViewContext:
    """
    Une passe de rendu: la requête, le contexte de base, la table des slots
    nommés (``content_for``) et la cible en cours de rendu.
    """

    def __init__(self, request=None, context=None):
        self.request = request
        self.context = dict(context or {})
        self.content_for = {}
        self.target = None

    @classmethod
    def from_context(cls, context):
        """
        ViewContext d'un rendu de template. Les slots et la cible sont
        partagés entre les tags; le contexte de base est relu à chaque appel
        (variables de boucle, {% with %}).
        """
        key = (cls, "view_context")
        view = context.render_context.get(key)
        if view is None:
            view = cls(context.get("request"))
            context.render_context[key] = view
        view.context = context.flatten()
        return view

    def render(self, partial, layout=None, locals=None):
        """
        Rend ``partial`` (un nom ou une liste ordonnée de candidats, le premier
        existant gagne) et l'enveloppe dans ``layout`` si fourni.
        Lève TemplateDoesNotExist si aucun candidat n'existe.
        """
        candidates = [partial] if isinstance(partial, str) else list(partial)
        template = select_template([template_name(p) for p in candidates])

        ctx = dict(self.context)
        ctx.update(locals or {})
        ctx["content_for"] = self.content_for
        html = template.render(ctx, self.request)

        if layout:
            ctx["content"] = mark_safe(html)
            html = get_template(template_name(layout)).render(ctx, self.request)
        return mark_safe(html)


# ── Rendu ─────────────────────────────────────────────────────────────


def render_notification(view, notifications, options=None):
    """
    Rend une notification ou une collection de notifications.

    Chaque élément d'une collection reçoit sa propre copie de ``options``;
    les rendus sont concaténés dans l'ordre. Collection vide, ou objet qui
    n'est ni une notification ni une collection: None.
    """
    options = options or {}
    if isinstance(notifications, Notification):
        return notifications.render(view, options)
    if isinstance(notifications, (str, bytes)) or not hasattr(notifications, "__iter__"):
        return None
    items = list(notifications)
    if not items:
        return None
    return mark_safe("".join(str(n.render(view, dict(options))) for n in items))


render_notifications = render_notification


def render_notification_of(view, target, options=None):
    """
    Rend l'index des notifications de ``target`` dans le partial d'index.

    Options:
      index_content         "simple", "none" ou autre (avec attributs)
      notification_partial  partial de chaque notification
      notification_layout   layout de chaque notification
      partial / partial_root / layout / layout_root / locals   pour l'index
      target, fallback      transmis à Notification.render
    """
    if not is_target(target):
        return None
    options = dict(options or {})
    target_type = get_target_type(target)

    notification_options = dict(options)
    notification_options.update(
        target=target_type.to_resources_name,
        partial=options.get("notification_partial"),
        layout=options.get("notification_layout"),
    )
    index_content = options.get("index_content")
    if index_content == "simple":
        notification_index = target_type.notification_index(target, limit=options.get("limit"))
    elif index_content == "none":
        notification_index = target_type.notifications(target).none()
    else:
        notification_index = target_type.notification_index_with_attributes(target, limit=options.get("limit"))

    prepare_content_for(view, target, notification_index, notification_options)
    return render_partial_index(view, target, options)


render_notifications_of = render_notification_of


def prepare_content_for(view, target, notification_index, options):
    """
    Remplit le slot ``notification_index``. Les options sont essayées avec
    l'indice de cible, puis sans (templates génériques).
    """
    without_hint = dict(options)
    without_hint.pop("target", None)
    variants = [options, without_hint]

    previous_target, view.target = view.target, target
    try:
        for i, variant in enumerate(variants):
            try:
                content = render_notification(view, notification_index, variant)
                break
            except TemplateDoesNotExist as exc:
                if i == len(variants) - 1:
                    raise
                logger.debug("Templates de notification %r absents (%s), repli sur les templates par défaut", options.get("target"), exc)
        view.content_for[NOTIFICATION_INDEX_SLOT] = content or ""
    finally:
        view.target = previous_target
    return view.content_for[NOTIFICATION_INDEX_SLOT]


def render_partial_index(view, target, options):
    index_path = options.get("partial")
    partials = [
        partial_index_path(target, index_path, options.get("partial_root")),
        partial_index_path(target, index_path, conf.default_view_root()),
    ]
    layout = layout_path(options.get("layout"), options.get("layout_root"))
    locals_ = dict(options.get("locals") or {})
    locals_["target"] = target
    return view.render(partials, layout=layout, locals=locals_)


def partial_index_path(target, path=None, root=None):
    path = path or "index"
    root = root or conf.target_view_root(get_target_type(target).to_resources_name)
    return select_path(path, root)


def layout_path(path=None, root=None):
    if path is None:
        return None
    root = root or conf.get("LAYOUT_ROOT")
    return select_path(path, root)


def select_path(path, root):
    return "/".join([str(root), str(path)])


# ── Routes ────────────────────────────────────────────────────────────


def notification_path_for(notification, params=None):
    target = notification.target
    return get_target_type(target).path("notification", target, notification, params)


def move_notification_path_for(notification, params=None):
    target = notification.target
    return get_target_type(target).path("move_notification", target, notification, params)


def open_notification_path_for(notification, params=None):
    target = notification.target
    return get_target_type(target).path("open_notification", target, notification, params)


def open_all_notifications_path_for(target, params=None):
    return get_target_type(target).path("open_all_notifications", target, params=params)


def notification_url_for(notification, params=None, request=None):
    target = notification.target
    return get_target_type(target).url("notification", target, notification, params, request)


def move_notification_url_for(notification, params=None, request=None):
    target = notification.target
    return get_target_type(target).url("move_notification", target, notification, params, request)


def open_notification_url_for(notification, params=None, request=None):
    target = notification.target
    return get_target_type(target).url("open_notification", target, notification, params, request)


def open_all_notifications_url_for(target, params=None, request=None):
    return get_target_type(target).url("open_all_notifications", target, params=params, request=request)
