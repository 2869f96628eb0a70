"""
URL configuration for the notifhub project.

The notification routes are generated per registered target type, e.g.
/notifications/users/1/notifications/ for auth.User.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("notifications/", include("activity_notification.urls", namespace="activity_notification")),
]
