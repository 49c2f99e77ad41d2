# services/comment_service.py
from typing import List, Optional

from flask import current_app

from constants.roles import SystemRole
from extensions.database import MAX_ROW_ID
from models.comment import Comment
from repositories.comment_repository import CommentRepository
from services.parent_registry import parent_registry
from utils.exceptions import BizError
from utils.validators import validate_email
import logging

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class CommentService:

    @staticmethod
    def submit(data: dict, current_user=None) -> Comment:
        """
        评论提交流程：校验 -> 建记录 -> 写入。
        notify_of_updates 随表单一起保存；开启审核时新评论为未审核状态。
        """
        parent_type = (data.get("parent_type") or "").strip()
        try:
            parent_id = int(data.get("parent_id"))
        except (TypeError, ValueError):
            raise BizError("parent_id 不合法")
        if not parent_type:
            raise BizError("parent_type 不能为空")
        if parent_registry.resolve_title(parent_type, parent_id) is None:
            raise BizError("评论对象不存在", code=404)

        content = (data.get("content") or "").strip()
        if not content:
            raise BizError("评论内容不能为空")
        max_len = current_app.config.get("COMMENT_MAX_LENGTH", 5000)
        if len(content) > max_len:
            raise BizError(f"评论内容过长（最多 {max_len} 字）")

        author_name = (data.get("author_name") or "").strip() or None
        author_email = (data.get("author_email") or "").strip() or None
        if current_user is not None:
            author_name = author_name or current_user.username
            author_email = author_email or current_user.email
        if author_email and not validate_email(author_email):
            raise BizError("邮箱格式不正确")

        notify = _parse_bool(data.get("notify_of_updates"))
        if notify and current_user is None:
            # 退订需要登录校验作者身份，匿名评论无法订阅
            raise BizError("登录后才能订阅评论通知")

        comment = Comment(
            parent_type=parent_type,
            parent_id=parent_id,
            author_user_id=current_user.id if current_user is not None else None,
            author_name=author_name,
            author_email=author_email,
            content=content,
            moderated=not current_app.config.get("COMMENTS_REQUIRE_MODERATION", True),
            notify_of_updates=notify,
        )
        CommentRepository.write(comment)
        return comment

    @staticmethod
    def approve(comment_id: int, actor) -> Comment:
        if actor is None or actor.role != SystemRole.ADMIN.value:
            raise BizError("需要管理员权限", code=403)
        comment = CommentRepository.get_by_id(comment_id)
        if not comment:
            raise BizError("评论不存在", code=404)
        if comment.moderated:
            return comment
        comment.moderated = True
        CommentRepository.write(comment)
        logger.info("comment %s approved by user %s", comment.id, actor.id)
        return comment

    @staticmethod
    def list_thread(parent_type: str, parent_id: Optional[int]) -> List[Comment]:
        if not parent_type or parent_id is None:
            raise BizError("parent_type 与 parent_id 不能为空")
        if not 0 < parent_id <= MAX_ROW_ID:
            return []
        return CommentRepository.list_thread(parent_type, parent_id, moderated_only=True)
