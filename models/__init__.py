# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，使得：
- Flask-Migrate/Alembic 自动检测模型。
- 外部模块可简化引用：from models import Comment, Page
"""

from .mixins import TimestampMixin
from .user import User
from .page import Page
from .comment import Comment

__all__ = [
    "TimestampMixin",
    "User", "Page", "Comment",
]
