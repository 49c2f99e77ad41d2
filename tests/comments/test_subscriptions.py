# -*- coding: utf-8 -*-
"""订阅列表与一次性“已退订”标记。"""

from models import User
from services.comment_notification_service import CommentNotificationService


def test_one_entry_per_thread(app, make_page, alice, make_comment):
    page_1 = make_page("P1")
    page_2 = make_page("P2")
    first = make_comment(page_1, alice, notify=True)
    make_comment(page_1, alice, notify=True)
    second = make_comment(page_2, alice, notify=True)

    with app.test_request_context():
        entries = CommentNotificationService.list_subscriptions(alice)

    assert [e["title"] for e in entries] == ["P1", "P2"]
    assert entries[0]["unsubscribe_link"] == f"/comments/unsubscribenotification/{first.id}"
    assert entries[1]["unsubscribe_link"] == f"/comments/unsubscribenotification/{second.id}"


def test_threads_without_opt_in_or_by_others_are_ignored(app, make_page, alice, bob, make_comment):
    page_1 = make_page("P1")
    page_2 = make_page("P2")
    make_comment(page_1, alice, notify=False)
    make_comment(page_2, bob, notify=True)

    with app.test_request_context():
        assert CommentNotificationService.list_subscriptions(alice) == []


def test_unresolvable_parent_is_skipped(app, make_page, alice, make_comment):
    page = make_page("P1")
    make_comment(999, alice, notify=True)
    make_comment(1, alice, notify=True, parent_type="article")
    make_comment(page, alice, notify=True)

    with app.test_request_context():
        entries = CommentNotificationService.list_subscriptions(alice)

    assert [e["title"] for e in entries] == ["P1"]


def test_absent_or_unsaved_user_has_no_subscriptions(app):
    with app.test_request_context():
        assert CommentNotificationService.list_subscriptions(None) == []
        assert CommentNotificationService.list_subscriptions(User(username="ghost")) == []


def test_subscriptions_endpoint(client, make_page, alice, make_comment, auth_headers):
    page = make_page("P1")
    make_comment(page, alice, notify=True)

    resp = client.get("/api/comments/subscriptions", headers=auth_headers(alice))

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert [e["title"] for e in data["items"]] == ["P1"]
    assert data["just_unsubscribed"] is False


def test_subscriptions_endpoint_anonymous(client):
    resp = client.get("/api/comments/subscriptions")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"items": [], "just_unsubscribed": False}


def test_just_unsubscribed_flag_is_read_once(app, alice):
    CommentNotificationService.mark_just_unsubscribed(alice.id)

    assert CommentNotificationService.has_just_unsubscribed(alice) is True
    assert CommentNotificationService.has_just_unsubscribed(alice) is False


def test_just_unsubscribed_flag_is_per_user(app, alice, bob):
    CommentNotificationService.mark_just_unsubscribed(alice.id)

    assert CommentNotificationService.has_just_unsubscribed(bob) is False
    assert CommentNotificationService.has_just_unsubscribed(None) is False
    assert CommentNotificationService.has_just_unsubscribed(alice) is True
