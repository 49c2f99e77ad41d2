# -*- coding: utf-8 -*-
"""
comment.py
--------------------------------------------------------------------
通用评论：
- 通过 parent_type + parent_id 挂到任意可评论内容（页面/文章等），
  同一组 (parent_type, parent_id) 即为一个评论线程。
- moderated：是否已通过审核；未审核的评论对外不可见，也不触发通知。
- notify_of_updates：作者是否订阅该线程的新评论通知。
注意：
- moderated 开启 active_history，写入时总能拿到修改前的值，
  否则对已过期实例赋值时 before 为空，会被误判为“刚通过审核”。
"""

from sqlalchemy.orm import column_property

from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS


class Comment(TimestampMixin, db.Model):
    __tablename__ = "comment"
    __table_args__ = (
        db.Index("ix_comment_parent", "parent_type", "parent_id"),
        db.Index("ix_comment_author_notify", "author_user_id", "notify_of_updates"),
        COMMON_TABLE_ARGS,
    )

    id = db.Column(db.Integer, primary_key=True)
    parent_type = db.Column(db.String(64), nullable=False)
    parent_id = db.Column(db.Integer, nullable=False)
    author_user_id = db.Column(db.Integer, db.ForeignKey("user.id", ondelete="SET NULL"))
    author_name = db.Column(db.String(100))
    author_email = db.Column(db.String(255))
    content = db.Column(db.Text, nullable=False)
    moderated = column_property(
        db.Column(db.Boolean, nullable=False, default=False, server_default="0"),
        active_history=True,
    )
    notify_of_updates = db.Column(db.Boolean, nullable=False, default=False, server_default="0")

    author = db.relationship("User", backref=db.backref("comments", passive_deletes=True))

    @property
    def thread_key(self):
        return self.parent_type, self.parent_id

    @property
    def author_display_email(self):
        """作者邮箱：优先取账号邮箱，匿名评论退回表单填写的邮箱。"""
        if self.author is not None and self.author.email:
            return self.author.email
        return self.author_email

    def to_dict(self):
        return {
            "id": self.id,
            "parent_type": self.parent_type,
            "parent_id": self.parent_id,
            "author_user_id": self.author_user_id,
            "author_name": self.author_name,
            "content": self.content,
            "moderated": bool(self.moderated),
            "notify_of_updates": bool(self.notify_of_updates),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
