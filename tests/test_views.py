"""
Tests for the per-target notification views, the template tags and the
badge context processor. They use the templates shipped with the app.
"""
import pytest
from django.template import Context, Template
from django.test import RequestFactory

from activity_notification.context_processors import unopened_notification_count
from activity_notification.helpers import notification_path_for, open_all_notifications_path_for
from activity_notification.targets import get_target_type


def index_url(target):
    return get_target_type(target).path("notifications", target)


class TestIndexView:
    def test_requires_login(self, client, user):
        response = client.get(index_url(user))

        assert response.status_code == 302

    def test_lists_own_notifications(self, client, user, make_notification):
        make_notification(user)
        make_notification(user, key="comment.reply")
        client.force_login(user)

        response = client.get(index_url(user))

        assert response.status_code == 200
        content = response.content.decode()
        assert content.count('class="notification unopened"') == 2
        assert "notification_index" in content

    def test_other_target_is_hidden(self, client, user, other_user):
        client.force_login(other_user)

        assert client.get(index_url(user)).status_code == 404

    def test_staff_can_see_any_target(self, client, user, staff_user):
        client.force_login(staff_user)

        assert client.get(index_url(user)).status_code == 200


class TestNotificationViews:
    def test_show(self, client, user, make_notification):
        n = make_notification(user)
        client.force_login(user)

        response = client.get(notification_path_for(n))

        assert response.status_code == 200
        assert "notification_list" in response.content.decode()

    def test_open(self, client, user, make_notification):
        n = make_notification(user)
        client.force_login(user)

        response = client.post(get_target_type(user).path("open_notification", user, n))

        assert response.status_code == 302
        assert response["Location"] == index_url(user)
        n.refresh_from_db()
        assert not n.unopened

    def test_open_requires_post(self, client, user, make_notification):
        n = make_notification(user)
        client.force_login(user)

        assert client.get(get_target_type(user).path("open_notification", user, n)).status_code == 405

    def test_move_redirects_to_stored_url(self, client, user, make_notification):
        n = make_notification(user, parameters={"url": "/somewhere/"})
        client.force_login(user)

        response = client.get(get_target_type(user).path("move_notification", user, n))

        assert response.status_code == 302
        assert response["Location"] == "/somewhere/"
        n.refresh_from_db()
        assert not n.unopened

    def test_move_without_opening(self, client, user, make_notification):
        n = make_notification(user)
        client.force_login(user)

        response = client.get(get_target_type(user).path("move_notification", user, n, {"open": "0"}))

        assert response["Location"] == index_url(user)
        n.refresh_from_db()
        assert n.unopened

    def test_notification_of_other_target_is_404(self, client, user, other_user, make_notification):
        n = make_notification(other_user)
        client.force_login(user)

        assert client.get(get_target_type(user).path("notification", user, n)).status_code == 404

    def test_open_all(self, client, user, make_notification):
        make_notification(user)
        make_notification(user)
        client.force_login(user)

        response = client.post(open_all_notifications_path_for(user))

        assert response.status_code == 204
        assert not get_target_type(user).notifications(user).unopened_only().exists()

    def test_open_all_get_redirects_to_index(self, client, user, make_notification):
        make_notification(user)
        client.force_login(user)

        response = client.get(open_all_notifications_path_for(user))

        assert response.status_code == 302
        assert response["Location"] == index_url(user)
        assert not get_target_type(user).notifications(user).unopened_only().exists()

    def test_open_all_filtered_by_key(self, client, user, make_notification):
        make_notification(user, key="comment.reply")
        kept = make_notification(user, key="article.new")
        client.force_login(user)

        response = client.post(open_all_notifications_path_for(user), {"filtered_by_key": "comment.reply"})

        assert response.status_code == 204
        kept.refresh_from_db()
        assert kept.unopened


class TestTemplateTags:
    def test_route_tags(self, route_stub):
        n = route_stub()
        template = Template(
            "{% load activity_notification_tags %}"
            "{% notification_path_for n %} {% open_notification_path_for n move='true' %}"
        )

        html = template.render(Context({"n": n}))

        assert html == "/notifications/users/7/notifications/5/ /notifications/users/7/notifications/5/open/?move=true"

    def test_url_tag_uses_request(self, route_stub):
        template = Template("{% load activity_notification_tags %}{% move_notification_url_for n %}")

        html = template.render(Context({"n": route_stub(), "request": RequestFactory().get("/")}))

        assert html == "http://testserver/notifications/users/7/notifications/5/move/"

    def test_render_notification_of_tag(self, user, make_notification):
        make_notification(user)
        template = Template(
            "{% load activity_notification_tags %}{% render_notification_of target index_content='simple' %}"
        )

        html = template.render(Context({"target": user, "request": RequestFactory().get("/")}))

        assert 'class="notification_index"' in html
        assert 'class="notification unopened"' in html

    def test_render_notification_inside_loop_sees_loop_variables(self, user, make_notification, use_templates):
        n = make_notification(user)
        use_templates({"activity_notification/notifications/default/default.html": "[{{ current }}]"})
        template = Template(
            "{% load activity_notification_tags %}"
            "{% for current in labels %}{% render_notification n %}{% endfor %}"
        )

        html = template.render(Context({"n": n, "labels": ["a", "b"]}))

        assert html == "[a][b]"

    def test_render_notifications_of_non_target_is_empty(self, group):
        template = Template("{% load activity_notification_tags %}{% render_notifications_of target %}")

        assert template.render(Context({"target": group})) == ""


class TestContextProcessor:
    def test_counts_unopened(self, user, make_notification):
        make_notification(user)
        request = RequestFactory().get("/")
        request.user = user

        assert unopened_notification_count(request) == {"unopened_notification_count": 1}

    def test_anonymous(self):
        from django.contrib.auth.models import AnonymousUser

        request = RequestFactory().get("/")
        request.user = AnonymousUser()

        assert unopened_notification_count(request) == {}
