from __future__ import annotations

from enum import Enum


# 评论表单中“订阅通知”复选框的字段名，与 Comment.notify_of_updates 一致
NOTIFY_FIELD_NAME = "notify_of_updates"

# 复选框插入到该字段之后
NOTIFY_FIELD_ANCHOR = "content"

# 一次性“已退订”标记的 Redis key 前缀，后接用户 ID
UNSUBSCRIBED_FLAG_PREFIX = "comment_notify:unsubscribed:"


class PermissionFailureReason(str, Enum):
    DEFAULT = "default"                      # 未登录
    ALREADY_LOGGED_IN = "already_logged_in"  # 登录的不是评论作者
    LOG_IN_AGAIN = "log_in_again"            # 登录状态已过期


# 可本地化文案：key -> 默认文案
MESSAGES_ZH: dict[str, str] = {
    "CommentInterface.NOTIFYOFUPDATES": "有新评论时请通知我。",
    "CommentNotifications.DEFAULTFAIL": "请先登录后再退订。",
    "CommentNotifications.ALREADYLOGGEDINFAIL": "请使用发表该评论的账号登录后继续。",
    "CommentNotifications.LOGINAGAINFAIL": "登录状态已失效，如需继续请重新登录。",
    "CommentNotifications.SUBJECT": "新评论：“{title}”",
}

MESSAGES_EN: dict[str, str] = {
    "CommentInterface.NOTIFYOFUPDATES": "Please notify me about new comments posted here.",
    "CommentNotifications.DEFAULTFAIL": "You must login to unsubscribe.",
    "CommentNotifications.ALREADYLOGGEDINFAIL": (
        "You must login as the correct user (the user who submitted the comment) to continue."
    ),
    "CommentNotifications.LOGINAGAINFAIL": (
        "You have been logged out. If you would like to login again, enter your credentials below."
    ),
    "CommentNotifications.SUBJECT": 'New Comment on "{title}"',
}

MESSAGE_CATALOGS: dict[str, dict[str, str]] = {
    "zh": MESSAGES_ZH,
    "en": MESSAGES_EN,
}

DEFAULT_LOCALE = "zh"


def translate(key: str, locale: str | None = None) -> str:
    """按 locale 取文案，缺失时回退到默认语言，再回退到 key 本身。"""
    catalog = MESSAGE_CATALOGS.get(locale or DEFAULT_LOCALE) or MESSAGES_ZH
    return catalog.get(key) or MESSAGES_ZH.get(key, key)


# 与调用处习惯保持一致
_t = translate


def permission_failure_messages(locale: str | None = None) -> dict[str, str]:
    return {
        PermissionFailureReason.DEFAULT.value: _t("CommentNotifications.DEFAULTFAIL", locale),
        PermissionFailureReason.ALREADY_LOGGED_IN.value: _t("CommentNotifications.ALREADYLOGGEDINFAIL", locale),
        PermissionFailureReason.LOG_IN_AGAIN.value: _t("CommentNotifications.LOGINAGAINFAIL", locale),
    }
