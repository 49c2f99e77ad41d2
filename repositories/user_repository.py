# repositories/user_repository.py
from __future__ import annotations
from typing import Optional

from models.user import User
from extensions.database import db


class UserRepository:
    """
    用户的仓储（数据访问）层。
    说明：
    - 不做业务规则判断，仅做纯粹的持久化读写。
    - 写操作不自动 commit，由上层显式调用 commit()。
    """

    @staticmethod
    def find_by_username(username: str) -> Optional[User]:
        return User.query.filter_by(username=username).first()

    @staticmethod
    def find_by_id(user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    @staticmethod
    def add(user: User):
        db.session.add(user)

    @staticmethod
    def commit():
        db.session.commit()
