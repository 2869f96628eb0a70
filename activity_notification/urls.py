from django.urls import path

from . import views
from .targets import ROUTE_NAMES, URL_NAMESPACE, routes_loaded

app_name = URL_NAMESPACE


def target_urlpatterns(target_type):
    res = target_type.resource_name
    prefix = f"{target_type.resources_name}/<int:target_id>/notifications/"
    kw = {"model": target_type.model}
    return [
        path(prefix, views.index, kw, name=ROUTE_NAMES["notifications"].format(resource=res)),
        path(f"{prefix}open_all/", views.open_all, kw, name=ROUTE_NAMES["open_all_notifications"].format(resource=res)),
        path(f"{prefix}<int:notification_id>/", views.show, kw, name=ROUTE_NAMES["notification"].format(resource=res)),
        path(f"{prefix}<int:notification_id>/open/", views.open_notification, kw, name=ROUTE_NAMES["open_notification"].format(resource=res)),
        path(f"{prefix}<int:notification_id>/move/", views.move, kw, name=ROUTE_NAMES["move_notification"].format(resource=res)),
    ]


# à partir d'ici, plus de nouveau type de cible (cf. targets.register)
urlpatterns = []
for _target_type in routes_loaded():
    urlpatterns += target_urlpatterns(_target_type)
