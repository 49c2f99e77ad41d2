# repositories/comment_repository.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError

from extensions.database import MAX_ROW_ID, db
from models.comment import Comment


@dataclass(frozen=True)
class FieldChange:
    before: Any
    after: Any


ChangeSet = Dict[str, FieldChange]
AfterPersistCallback = Callable[[Comment, ChangeSet], None]

_after_persist_callbacks: List[AfterPersistCallback] = []


def _collect_changes(comment: Comment) -> tuple[ChangeSet, bool]:
    """
    从 SQLAlchemy 属性历史中取出本次写入的 before/after。
    新记录的 before 一律为 None，id 在 flush 之后补上（before=0）。
    """
    state = inspect(comment)
    is_new = state.transient or state.pending
    changes: ChangeSet = {}
    for attr in state.mapper.column_attrs:
        hist = state.attrs[attr.key].history
        if not hist.has_changes():
            continue
        before = hist.deleted[0] if hist.deleted else None
        after = hist.added[0] if hist.added else None
        changes[attr.key] = FieldChange(before=before, after=after)
    return changes, is_new


class CommentRepository:
    """
    评论的仓储层。
    - 查询方法只读，不 commit。
    - write() 为唯一的持久化入口：flush + commit 后把变更集交给 after-persist 回调。
    """

    @staticmethod
    def register_after_persist(callback: AfterPersistCallback):
        if callback not in _after_persist_callbacks:
            _after_persist_callbacks.append(callback)

    @staticmethod
    def get_by_id(comment_id: int) -> Optional[Comment]:
        if comment_id is None or not 0 < comment_id <= MAX_ROW_ID:
            return None
        return db.session.get(Comment, comment_id)

    @staticmethod
    def list_thread(
        parent_type: str,
        parent_id: int,
        notify_only: bool = False,
        moderated_only: bool = False,
    ) -> List[Comment]:
        stmt = select(Comment).where(
            Comment.parent_type == parent_type,
            Comment.parent_id == parent_id,
        )
        if notify_only:
            stmt = stmt.where(Comment.notify_of_updates == True)  # noqa: E712
        if moderated_only:
            stmt = stmt.where(Comment.moderated == True)  # noqa: E712
        stmt = stmt.order_by(Comment.id.asc())
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def list_subscribed_by_author(author_user_id: int) -> List[Comment]:
        stmt = (
            select(Comment)
            .where(
                Comment.author_user_id == author_user_id,
                Comment.notify_of_updates == True,  # noqa: E712
            )
            .order_by(Comment.id.asc())
        )
        return list(db.session.execute(stmt).scalars().all())

    @staticmethod
    def write(comment: Comment) -> ChangeSet:
        """
        变更集取自 flush 前的属性历史，调用方应先赋值再直接 write()，
        中间不要执行查询：autoflush 会提前清空历史，moderated 的状态变化随之丢失，通知不会发出。
        """
        changes, is_new = _collect_changes(comment)
        if is_new:
            db.session.add(comment)
        db.session.flush()
        if is_new:
            changes["id"] = FieldChange(before=0, after=comment.id)
        CommentRepository.commit()
        if changes:
            CommentRepository._fire_after_persist(comment, changes)
        return changes

    @staticmethod
    def _fire_after_persist(comment: Comment, changes: ChangeSet):
        for callback in list(_after_persist_callbacks):
            callback(comment, changes)

    @staticmethod
    def commit():
        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            raise e
