# controllers/comment_controller.py
from flask import Blueprint, current_app, g, redirect, request

from controllers.auth_helpers import auth_required, get_current_user, optional_auth, require_admin
from forms.comment_form import build_comment_form
from services.comment_notification_service import CommentNotificationService
from services.comment_service import CommentService
from extensions.database import MAX_ROW_ID
from utils.exceptions import BizError
from utils.response import json_response


comment_bp = Blueprint("comment", __name__, url_prefix="/api/comments")
# 退订链接出现在邮件/页面里，单独挂在非 /api 前缀下
comment_public_bp = Blueprint("comment_public", __name__, url_prefix="/comments")


def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message, data=e.data)


comment_bp.register_error_handler(BizError, _biz_error)
comment_public_bp.register_error_handler(BizError, _biz_error)


def _parse_id(raw):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if 0 < value <= MAX_ROW_ID else None


@comment_bp.get("/form")
def get_comment_form():
    form = build_comment_form(current_app.config.get("LOCALE"))
    return json_response(data=form.to_dict())


@comment_bp.post("")
@optional_auth()
def submit_comment():
    data = request.get_json(silent=True) or {}
    comment = CommentService.submit(data, current_user=get_current_user())
    message = "评论已发表" if comment.moderated else "评论已提交，等待审核"
    return json_response(message=message, data=comment.to_dict(), code=201)


@comment_bp.get("")
def list_comments():
    args = request.args
    comments = CommentService.list_thread(args.get("parent_type"), args.get("parent_id", type=int))
    return json_response(data={"items": [c.to_dict() for c in comments], "total": len(comments)})


@comment_bp.put("/<int:comment_id>/approve")
@auth_required()
@require_admin
def approve_comment(comment_id: int):
    comment = CommentService.approve(comment_id, actor=get_current_user())
    return json_response(message="审核通过", data=comment.to_dict())


@comment_bp.get("/subscriptions")
@optional_auth()
def list_subscriptions():
    user = get_current_user()
    return json_response(data={
        "items": CommentNotificationService.list_subscriptions(user),
        "just_unsubscribed": CommentNotificationService.has_just_unsubscribed(user),
    })


@comment_public_bp.get("/unsubscribenotification", defaults={"comment_id": None})
@comment_public_bp.get("/unsubscribenotification/<comment_id>")
@optional_auth(tolerate_invalid=True)
def unsubscribe_notification(comment_id):
    back_url = request.referrer or "/"
    CommentNotificationService.unsubscribe(
        _parse_id(comment_id),
        get_current_user(),
        session_expired=g.auth_expired,
        back_url=back_url,
    )
    return redirect(back_url)
