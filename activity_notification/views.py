from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from .helpers import ViewContext, render_notification_of
from .models import Notification
from .targets import get_target_type


def _get_target(request, model, target_id):
    target = get_object_or_404(model, pk=target_id)
    # propriétaire ou staff uniquement
    if not (request.user.is_staff or target == request.user):
        raise Http404("Notification target not found")
    return target


def _get_notification(request, model, target_id, notification_id):
    target = _get_target(request, model, target_id)
    qs = get_target_type(model).notifications(target)
    return target, get_object_or_404(qs, pk=notification_id)


def _index_url(model, target):
    return get_target_type(model).path("notifications", target)


@login_required
def index(request, model, target_id):
    target = _get_target(request, model, target_id)
    options = {
        "index_content": request.GET.get("index_content"),
        "fallback": "default",
    }
    view = ViewContext(request)
    notification_index = render_notification_of(view, target, options)
    return render(
        request,
        "activity_notification/notifications/page.html",
        {"target": target, "notification_index": notification_index},
    )


@login_required
def show(request, model, target_id, notification_id):
    target, n = _get_notification(request, model, target_id, notification_id)
    view = ViewContext(request)
    html = n.render(view, {"fallback": "default"})
    return render(
        request,
        "activity_notification/notifications/show_page.html",
        {"target": target, "notification": n, "notification_html": html},
    )


@login_required
@require_POST
def open_notification(request, model, target_id, notification_id):
    target, n = _get_notification(request, model, target_id, notification_id)
    n.open()
    if request.POST.get("move"):
        return redirect(get_target_type(model).path("move_notification", target, n))
    return redirect(_index_url(model, target))


@login_required
def move(request, model, target_id, notification_id):
    target, n = _get_notification(request, model, target_id, notification_id)
    if request.GET.get("open", "1") != "0":
        n.open()

    url = ""
    if n.notifiable is not None and hasattr(n.notifiable, "get_absolute_url"):
        url = n.notifiable.get_absolute_url() or ""
    if not url:
        url = (n.parameters or {}).get("url", "")
    return redirect(url or _index_url(model, target))


@login_required
def open_all(request, model, target_id):
    target = _get_target(request, model, target_id)
    qs = Notification.objects.filtered_by_target(target)
    key = request.POST.get("filtered_by_key") or request.GET.get("filtered_by_key")
    if key:
        qs = qs.filtered_by_key(key)
    qs.open_all()
    if request.method == "POST":
        return HttpResponse(status=204)
    return redirect(_index_url(model, target))
