# activity_notification/targets.py
"""
Registre des types de cibles de notifications.

Une cible est le propriétaire des notifications (en général le modèle
utilisateur). Chaque modèle enregistré reçoit un ``TargetType`` portant ses
noms de ressource et les constructeurs de routes utilisés par les helpers de
vue: ``notification_path_for`` et consorts passent par ce registre.

Les routes sont générées au chargement de l'URLconf: enregistrer un nouveau
type après coup lève ImproperlyConfigured (déclarer les cibles dans
ACTIVITY_NOTIFICATION["TARGETS"] ou dans un AppConfig.ready()).
"""
import logging

from django.apps import apps
from django.core.exceptions import ImproperlyConfigured
from django.urls import reverse
from django.utils.http import urlencode

from . import conf
from .exceptions import UnregisteredTargetType

logger = logging.getLogger(__name__)

URL_NAMESPACE = "activity_notification"

# action -> nom de route (sans namespace)
ROUTE_NAMES = {
    "notifications": "{resource}_notifications",
    "notification": "{resource}_notification",
    "move_notification": "move_{resource}_notification",
    "open_notification": "open_{resource}_notification",
    "open_all_notifications": "open_all_{resource}_notifications",
}


class TargetType:
    def __init__(self, model, resource_name=None, resources_name=None):
        self.model = model
        self.resource_name = resource_name or model._meta.model_name
        self.resources_name = resources_name or f"{self.resource_name}s"

    def __repr__(self):
        return f"<TargetType {self.model.__name__} ({self.resource_name}/{self.resources_name})>"

    # Conventions de nommage
    @property
    def to_resource_name(self):
        return self.resource_name

    @property
    def to_resources_name(self):
        return self.resources_name

    # Notifications d'une cible
    def notifications(self, target):
        from .models import Notification

        return Notification.objects.filtered_by_target(target)

    def notification_index(self, target, limit=None, with_attributes=False):
        """Non lues d'abord, puis lues; les plus récentes en tête dans chaque groupe."""
        qs = self.notifications(target)
        if with_attributes:
            qs = qs.with_attributes()
        limit = limit if limit is not None else conf.get("INDEX_LIMIT")
        unopened = qs.unopened_only().latest_order()
        opened = qs.opened_only().latest_order()
        if limit is not None:
            unopened = list(unopened[:limit])
            opened = list(opened[: max(limit - len(unopened), 0)])
        return list(unopened) + list(opened)

    def notification_index_with_attributes(self, target, limit=None):
        return self.notification_index(target, limit=limit, with_attributes=True)

    # Routes
    def route_name(self, action):
        return f"{URL_NAMESPACE}:{ROUTE_NAMES[action].format(resource=self.resource_name)}"

    def path(self, action, target, notification=None, params=None):
        kwargs = {"target_id": target.pk}
        if notification is not None:
            kwargs["notification_id"] = notification.pk
        url = reverse(self.route_name(action), kwargs=kwargs)
        if params:
            url = f"{url}?{urlencode(params, doseq=True)}"
        return url

    def url(self, action, target, notification=None, params=None, request=None):
        path = self.path(action, target, notification, params)
        if request is not None:
            return request.build_absolute_uri(path)
        return f"{conf.get('BASE_URL').rstrip('/')}{path}"


_registry = {}
_routes_loaded = False


def register(model, resource_name=None, resources_name=None):
    target_type = TargetType(model, resource_name, resources_name)
    existing = _registry.get(model)
    if _routes_loaded and (
        existing is None
        or (existing.resource_name, existing.resources_name) != (target_type.resource_name, target_type.resources_name)
    ):
        # les routes de ce type n'existeraient pas dans l'URLconf
        raise ImproperlyConfigured(
            f"Cannot register {model.__name__} as a notification target: the URLconf is already loaded. "
            "Declare it in ACTIVITY_NOTIFICATION['TARGETS'] or register it in AppConfig.ready()."
        )
    for other in _registry.values():
        if other.model is model:
            continue
        if other.resource_name == target_type.resource_name or other.resources_name == target_type.resources_name:
            raise ImproperlyConfigured(
                f"Resource name {target_type.resource_name!r} of {model.__name__} "
                f"is already used by {other.model.__name__}."
            )
    _registry[model] = target_type
    logger.debug("Type de cible enregistré: %r", target_type)
    return target_type


def unregister(model):
    _registry.pop(model, None)


def registered_types():
    return list(_registry.values())


def routes_loaded():
    """Appelé par activity_notification.urls: le registre est figé pour les nouveaux types."""
    global _routes_loaded
    _routes_loaded = True
    return registered_types()


def get_target_type(obj):
    """TargetType d'une classe ou instance de modèle; lève UnregisteredTargetType."""
    model = obj if isinstance(obj, type) else obj.__class__
    for klass in model.__mro__:
        if klass in _registry:
            return _registry[klass]
    raise UnregisteredTargetType(model)


def is_target(obj):
    try:
        get_target_type(obj)
    except UnregisteredTargetType:
        return False
    return True


def register_from_settings():
    """
    Enregistre les cibles de ACTIVITY_NOTIFICATION["TARGETS"], qui accepte:
      - "app_label.Model"
      - {"model": "app_label.Model", "resource_name": ..., "resources_name": ...}
    """
    for entry in conf.get("TARGETS"):
        if isinstance(entry, str):
            entry = {"model": entry}
        try:
            model = apps.get_model(entry["model"])
        except (KeyError, LookupError, ValueError) as exc:
            raise ImproperlyConfigured(f"Invalid notification target {entry!r}: {exc}") from exc
        register(model, entry.get("resource_name"), entry.get("resources_name"))
