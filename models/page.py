# -*- coding: utf-8 -*-
"""
page.py
--------------------------------------------------------------------
内置的可评论内容类型。
评论通过 parent_type="page" + parent_id 关联到页面，启动时注册到 ParentRegistry。
"""

from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS


class Page(TimestampMixin, db.Model):
    __tablename__ = "page"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
        }
