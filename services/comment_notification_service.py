# services/comment_notification_service.py
"""
评论更新通知。

三条主线：
  1. 评论写入后（after-persist 回调）判断是否“刚通过审核”，是则给同一线程里
     订阅了通知的作者各发一封邮件（按邮箱去重）。
  2. 列出当前用户订阅的线程（按线程去重），每条带一个退订链接。
  3. 退订：校验请求者就是评论作者后，关闭该线程所有评论的订阅标记，
     并留下一次性的“已退订”标记供跳转后的页面展示提示。
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from flask import current_app, render_template, url_for
from markupsafe import escape

from constants.comment_notifications import (
    UNSUBSCRIBED_FLAG_PREFIX,
    PermissionFailureReason,
    permission_failure_messages,
    translate,
)
from extensions.mailer import MailMessage, mailer
from extensions.redis_client import get_redis
from models.comment import Comment
from repositories.comment_repository import ChangeSet, CommentRepository
from services.parent_registry import parent_registry
from utils.exceptions import BizError, PermissionFailure

logger = logging.getLogger(__name__)


def _locale() -> str:
    return current_app.config.get("LOCALE", "zh")


class CommentNotificationService:

    # ------------------------------------------------------------------
    # 通知
    # ------------------------------------------------------------------
    @staticmethod
    def should_notify(changes: Optional[ChangeSet]) -> bool:
        """
        仅在以下两种写入时通知：
          - 新记录（id 由 0 变为新值）且写入时即为已审核（站点未开启审核）
          - 已有记录的 moderated 由 False 变为 True（管理员刚审核通过）
        其它写入（包括已审核评论被再次编辑）一律不通知。
        """
        if not changes:
            return False
        moderated = changes.get("moderated")
        if moderated is None:
            return False
        id_change = changes.get("id")
        if id_change is not None and id_change.before == 0 and moderated.after is True:
            return True
        return not moderated.before and moderated.after is True

    @staticmethod
    def on_after_persist(comment: Comment, changes: ChangeSet):
        if CommentNotificationService.should_notify(changes):
            CommentNotificationService.notify_on_approval(comment)

    @staticmethod
    def collect_recipients(parent_type: str, parent_id: int) -> List[str]:
        """线程内所有订阅者邮箱：保持首次出现顺序，区分大小写去重，空邮箱忽略。"""
        recipients: List[str] = []
        for c in CommentRepository.list_thread(parent_type, parent_id, notify_only=True):
            email = c.author_display_email
            if email and email not in recipients:
                recipients.append(email)
        return recipients

    @staticmethod
    def build_message(comment: Comment, parent_title: str, recipient: str) -> MailMessage:
        context = {"comment": comment, "parent_title": parent_title}
        subject = translate("CommentNotifications.SUBJECT", _locale()).format(title=str(escape(parent_title)))
        return MailMessage(
            subject=subject,
            sender=current_app.config["ADMIN_EMAIL"],
            to=recipient,
            body_text=render_template("emails/new_comment.txt", **context),
            body_html=render_template("emails/new_comment.html", **context),
        )

    @staticmethod
    def notify_on_approval(comment: Comment) -> List[str]:
        """
        给线程订阅者发信，返回发送成功的收件人列表。
        父对象无法解析（类型未注册或已删除）时静默放弃。
        单封失败只记日志，不影响后续收件人，也不重试。
        """
        parent_title = parent_registry.resolve_title(comment.parent_type, comment.parent_id)
        if parent_title is None:
            logger.info(
                "skip comment notification, parent not found: %s#%s",
                comment.parent_type, comment.parent_id,
            )
            return []

        recipients = CommentNotificationService.collect_recipients(comment.parent_type, comment.parent_id)
        logger.info("comment %s approved, notifying %d subscriber(s)", comment.id, len(recipients))

        sent: List[str] = []
        for address in recipients:
            try:
                mailer.send(CommentNotificationService.build_message(comment, parent_title, address))
            except Exception:
                logger.exception("failed to send comment notification to %s", address)
                continue
            sent.append(address)
        return sent

    # ------------------------------------------------------------------
    # 订阅列表
    # ------------------------------------------------------------------
    @staticmethod
    def unsubscribe_link(comment_id: int) -> str:
        return url_for("comment_public.unsubscribe_notification", comment_id=comment_id)

    @staticmethod
    def list_subscriptions(user) -> List[Dict[str, str]]:
        if user is None or getattr(user, "id", None) is None:
            return []

        entries: List[Dict[str, str]] = []
        added: List[Comment] = []
        # TODO: 订阅数多时改为按 (parent_type, parent_id) 分组查询，避免逐条比对
        for comment in CommentRepository.list_subscribed_by_author(user.id):
            if any(c.thread_key == comment.thread_key for c in added):
                continue
            title = parent_registry.resolve_title(comment.parent_type, comment.parent_id)
            if title is None:
                continue
            entries.append({
                "title": title,
                "unsubscribe_link": CommentNotificationService.unsubscribe_link(comment.id),
            })
            added.append(comment)
        return entries

    # ------------------------------------------------------------------
    # 退订
    # ------------------------------------------------------------------
    @staticmethod
    def unsubscribe(comment_id, user, *, session_expired: bool = False, back_url: Optional[str] = None) -> int:
        """
        关闭评论所在线程中所有订阅标记，返回被修改的评论数。
        注意：按线程整体关闭，不按作者过滤。
        """
        if not comment_id:
            raise BizError("无权访问", code=403)
        comment = CommentRepository.get_by_id(comment_id)
        if not comment:
            raise BizError("无权访问", code=403)

        if user is None or user.id != comment.author_user_id:
            if user is not None:
                reason = PermissionFailureReason.ALREADY_LOGGED_IN
            elif session_expired:
                reason = PermissionFailureReason.LOG_IN_AGAIN
            else:
                reason = PermissionFailureReason.DEFAULT
            raise PermissionFailure(
                reason.value,
                permission_failure_messages(_locale()),
                login_url=current_app.config.get("LOGIN_URL", "/login"),
                back_url=back_url,
            )

        thread = CommentRepository.list_thread(comment.parent_type, comment.parent_id, notify_only=True)
        for c in thread:
            c.notify_of_updates = False
            CommentRepository.write(c)

        CommentNotificationService.mark_just_unsubscribed(user.id)
        logger.info(
            "user %s unsubscribed from %s#%s (%d comment(s))",
            user.id, comment.parent_type, comment.parent_id, len(thread),
        )
        return len(thread)

    @staticmethod
    def mark_just_unsubscribed(user_id: int):
        ttl = current_app.config.get("UNSUBSCRIBE_FLAG_TTL", 300)
        get_redis().setex(f"{UNSUBSCRIBED_FLAG_PREFIX}{user_id}", ttl, "1")

    @staticmethod
    def has_just_unsubscribed(user) -> bool:
        """读取并清除一次性“已退订”标记。"""
        if user is None or getattr(user, "id", None) is None:
            return False
        value = get_redis().getdel(f"{UNSUBSCRIBED_FLAG_PREFIX}{user.id}")
        return bool(value)
