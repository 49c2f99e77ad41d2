# -*- coding: utf-8 -*-
"""
user.py
--------------------------------------------------------------------
用户实体。
说明：
- role 字段为全局角色：admin / user。
- active 控制账号启用状态，避免直接删除账号导致评论作者失参。
- password_version 写入 token，修改密码后旧 token 即失效。
"""

from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS
from constants.roles import SystemRole


class User(TimestampMixin, db.Model):
    __tablename__ = "user"
    __table_args__ = (COMMON_TABLE_ARGS,)

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(120), unique=True)
    role = db.Column(db.String(32), nullable=False, server_default=SystemRole.USER.value)
    active = db.Column(db.Boolean, nullable=False, server_default="1")
    password_version = db.Column(db.Integer, nullable=False, server_default="1")

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role}>"
