from __future__ import annotations

from enum import Enum


class SystemRole(str, Enum):
    """
    系统角色：
    - ADMIN 负责内容维护与评论审核
    - USER 普通注册用户，可发表评论、订阅通知
    """

    ADMIN = "admin"
    USER = "user"
