import logging

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.template import TemplateDoesNotExist
from django.utils import timezone
from django.utils.html import escape
from django.utils.translation import gettext

from . import conf

logger = logging.getLogger(__name__)


class NotificationQuerySet(models.QuerySet):
    def filtered_by_target(self, target):
        ctype = ContentType.objects.get_for_model(target.__class__)
        return self.filter(target_content_type=ctype, target_object_id=target.pk)

    def filtered_by_key(self, key):
        return self.filter(key=key)

    def unopened_only(self):
        return self.filter(opened_at__isnull=True)

    def opened_only(self):
        return self.filter(opened_at__isnull=False)

    def latest_order(self):
        return self.order_by("-created_at", "-pk")

    def with_attributes(self):
        return self.select_related("notifier").prefetch_related("target", "notifiable")

    def open_all(self, opened_at=None):
        return self.unopened_only().update(opened_at=opened_at or timezone.now())


class Notification(models.Model):
    # Propriétaire de la notification (ex: un utilisateur)
    target_content_type = models.ForeignKey(
        ContentType, on_delete=models.CASCADE, related_name="+"
    )
    target_object_id = models.PositiveIntegerField()
    target = GenericForeignKey("target_content_type", "target_object_id")

    # Objet concerné (commentaire, article, ...)
    notifiable_content_type = models.ForeignKey(
        ContentType, on_delete=models.CASCADE, related_name="+"
    )
    notifiable_object_id = models.PositiveIntegerField()
    notifiable = GenericForeignKey("notifiable_content_type", "notifiable_object_id")

    key = models.CharField(max_length=100, default="default")  # ex: "comment.reply"
    notifier = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    parameters = models.JSONField(default=dict, blank=True)

    opened_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-pk"]
        indexes = [
            models.Index(fields=["target_content_type", "target_object_id", "opened_at"], name="notif_target_opened_idx"),
        ]

    def __str__(self):
        return f"{self.key} • {self.target}"

    @property
    def unopened(self):
        return self.opened_at is None

    def open(self, opened_at=None):
        if not self.unopened:
            return False
        self.opened_at = opened_at or timezone.now()
        self.save(update_fields=["opened_at"])
        return True

    def text(self, options=None):
        """Texte traduit de `notification.<target>.<key>.text`, sinon parameters["text"] ou la clé."""
        options = options or {}
        target = options.get("target") or conf.get("DEFAULT_TARGET_VIEW")
        msgid = f"notification.{target}.{self.key}.text"
        translated = gettext(msgid)
        if translated != msgid:
            return translated
        return (self.parameters or {}).get("text") or self.key

    def render(self, view, options=None):
        """Rend la notification via `view` (un `helpers.ViewContext`).

        Options: partial, partial_root, target, layout, layout_root, fallback,
        locals, i18n. Avec ``fallback="text"`` un template absent donne le texte
        traduit; tout autre nom de fallback est essayé comme second partial
        sous la même racine.
        """
        options = options or {}
        if options.get("i18n"):
            return escape(self.text(options))

        partial = self.partial_path(options.get("partial"), options.get("partial_root"), options.get("target"))
        layout = self.layout_path(options.get("layout"), options.get("layout_root"))
        locals_ = dict(options.get("locals") or {})
        locals_.update(
            notification=self,
            target=self.target,
            notifiable=self.notifiable,
            parameters=self.parameters,
        )

        fallback = options.get("fallback")
        candidates = [partial]
        if fallback and fallback != "text":
            candidates.append(self.partial_path(fallback, options.get("partial_root"), options.get("target")))

        try:
            return view.render(candidates, layout=layout, locals=locals_)
        except TemplateDoesNotExist:
            if fallback != "text":
                raise
            logger.debug("Pas de template pour la notification %s (%s), rendu texte", self.pk, partial)
            return escape(self.text(options))

    def partial_path(self, path=None, root=None, target=None):
        if not root and target:
            root = conf.target_view_root(target)
        root = root or conf.default_view_root()
        path = path or self.key.replace(".", "/")
        return f"{root}/{path}"

    def layout_path(self, path=None, root=None):
        if path is None:
            return None
        return f"{root or conf.get('LAYOUT_ROOT')}/{path}"
