# -*- coding: utf-8 -*-
from forms.comment_form import Form, FormField, alter_comment_form, build_comment_form


def test_notify_checkbox_follows_content_field():
    form = build_comment_form()

    names = form.field_names()
    assert names[names.index("content") + 1] == "notify_of_updates"
    checkbox = form.get_field("notify_of_updates")
    assert checkbox.field_type == "checkbox"
    assert checkbox.label == "有新评论时请通知我。"
    assert checkbox.default is False


def test_label_is_localizable():
    form = build_comment_form("en")

    assert form.get_field("notify_of_updates").label == "Please notify me about new comments posted here."


def test_alter_comment_form_is_idempotent():
    form = build_comment_form()

    alter_comment_form(form)

    assert form.field_names().count("notify_of_updates") == 1


def test_checkbox_appended_when_anchor_missing():
    form = Form(name="comment", fields=[FormField("author_name", "text")])

    alter_comment_form(form)

    assert form.field_names() == ["author_name", "notify_of_updates"]


def test_form_endpoint(client):
    resp = client.get("/api/comments/form")

    assert resp.status_code == 200
    fields = [f["name"] for f in resp.get_json()["data"]["fields"]]
    assert fields == ["parent_type", "parent_id", "author_name", "author_email", "content", "notify_of_updates"]
