# -*- coding: utf-8 -*-
"""评论提交与审核流程。"""

from extensions.database import db
from models import Comment


def test_submit_stores_opt_in_and_waits_for_moderation(client, outbox, make_page, alice, auth_headers):
    page = make_page()

    resp = client.post(
        "/api/comments",
        json={"parent_type": "page", "parent_id": page.id, "content": "写得好", "notify_of_updates": True},
        headers=auth_headers(alice),
    )

    assert resp.status_code == 201
    data = resp.get_json()["data"]
    assert data["moderated"] is False
    assert data["notify_of_updates"] is True
    assert data["author_user_id"] == alice.id
    assert outbox == []


def test_admin_approval_sends_notifications(client, outbox, make_page, alice, admin, auth_headers):
    page = make_page("P1")
    created = client.post(
        "/api/comments",
        json={"parent_type": "page", "parent_id": page.id, "content": "写得好", "notify_of_updates": "1"},
        headers=auth_headers(alice),
    ).get_json()["data"]

    resp = client.put(f"/api/comments/{created['id']}/approve", headers=auth_headers(admin))

    assert resp.status_code == 200
    assert [m.to for m in outbox] == ["alice@x.com"]

    # 重复审核不再发信
    client.put(f"/api/comments/{created['id']}/approve", headers=auth_headers(admin))
    assert len(outbox) == 1


def test_approval_requires_admin(client, make_page, alice, make_comment, auth_headers):
    page = make_page()
    comment = make_comment(page, alice)

    resp = client.put(f"/api/comments/{comment.id}/approve", headers=auth_headers(alice))

    assert resp.status_code == 403
    db.session.expire_all()
    assert db.session.get(Comment, comment.id).moderated is False


def test_without_moderation_comment_is_published_and_notifies(app, client, outbox, make_page, alice, auth_headers):
    app.config["COMMENTS_REQUIRE_MODERATION"] = False
    page = make_page()

    resp = client.post(
        "/api/comments",
        json={"parent_type": "page", "parent_id": page.id, "content": "沙发", "notify_of_updates": True},
        headers=auth_headers(alice),
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["moderated"] is True
    assert [m.to for m in outbox] == ["alice@x.com"]


def test_anonymous_cannot_subscribe(client, make_page):
    page = make_page()

    resp = client.post(
        "/api/comments",
        json={
            "parent_type": "page",
            "parent_id": page.id,
            "content": "路过",
            "author_email": "guest@z.com",
            "notify_of_updates": True,
        },
    )

    assert resp.status_code == 400


def test_submit_rejects_unknown_parent(client, alice, auth_headers):
    resp = client.post(
        "/api/comments",
        json={"parent_type": "article", "parent_id": 1, "content": "?"},
        headers=auth_headers(alice),
    )

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "评论对象不存在"


def test_list_returns_only_approved_comments(client, make_page, alice, make_comment):
    page = make_page()
    approved = make_comment(page, alice, moderated=True)
    make_comment(page, alice, moderated=False)

    resp = client.get("/api/comments", query_string={"parent_type": "page", "parent_id": page.id})

    assert resp.status_code == 200
    assert [c["id"] for c in resp.get_json()["data"]["items"]] == [approved.id]


def test_out_of_range_ids_are_treated_as_missing(client, admin, alice, auth_headers):
    huge = 99999999999999999999999

    resp = client.put(f"/api/comments/{huge}/approve", headers=auth_headers(admin))
    assert resp.status_code == 404

    resp = client.post(
        "/api/comments",
        json={"parent_type": "page", "parent_id": huge, "content": "?"},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 404

    resp = client.get("/api/comments", query_string={"parent_type": "page", "parent_id": huge})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["items"] == []
