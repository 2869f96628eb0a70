from django.apps import AppConfig


class ActivityNotificationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "activity_notification"
    verbose_name = "Activity notifications"

    def ready(self):
        # enregistre les cibles déclarées dans ACTIVITY_NOTIFICATION["TARGETS"]
        from .targets import register_from_settings

        register_from_settings()
