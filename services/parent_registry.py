# services/parent_registry.py
"""
评论父对象注册表。

评论并不固定挂在某一张表上，而是用 parent_type（类型标签）+ parent_id 指向
任意可评论内容。各内容类型在启动时把自己的解析器注册进来：

    parent_registry.register("page", ModelParentResolver(Page))

未注册的类型标签在解析时视为不存在。
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from extensions.database import MAX_ROW_ID, db

logger = logging.getLogger(__name__)


class ParentResolver(Protocol):
    def exists(self, parent_id: int) -> bool:
        ...

    def fetch_title(self, parent_id: int) -> Optional[str]:
        ...


class ModelParentResolver:
    """以 SQLAlchemy 模型为后端的解析器，标题取 title_attr 属性。"""

    def __init__(self, model, title_attr: str = "title"):
        self.model = model
        self.title_attr = title_attr

    def _get(self, parent_id: int):
        if parent_id is None or not 0 < parent_id <= MAX_ROW_ID:
            return None
        return db.session.get(self.model, parent_id)

    def exists(self, parent_id: int) -> bool:
        return self._get(parent_id) is not None

    def fetch_title(self, parent_id: int) -> Optional[str]:
        obj = self._get(parent_id)
        if obj is None:
            return None
        return getattr(obj, self.title_attr, None)


class ParentRegistry:
    def __init__(self):
        self._resolvers: Dict[str, ParentResolver] = {}

    def register(self, parent_type: str, resolver: ParentResolver):
        if not parent_type:
            raise ValueError("parent_type 不能为空")
        self._resolvers[parent_type] = resolver

    def is_registered(self, parent_type: str) -> bool:
        return parent_type in self._resolvers

    def resolve_title(self, parent_type: str, parent_id: int) -> Optional[str]:
        """
        返回父对象标题；类型未注册或对象不存在时返回 None。
        标题为空字符串时仍视为存在，返回 ""。
        """
        if not self.is_registered(parent_type):
            logger.debug("parent type not registered: %s", parent_type)
            return None
        resolver = self._resolvers[parent_type]
        if not resolver.exists(parent_id):
            return None
        return resolver.fetch_title(parent_id) or ""


parent_registry = ParentRegistry()
