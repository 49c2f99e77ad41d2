# services/page_service.py
from typing import Optional

from constants.roles import SystemRole
from models.page import Page
from repositories.page_repository import PageRepository
from utils.exceptions import BizError


class PageService:

    @staticmethod
    def create(title: str, content: Optional[str], actor) -> Page:
        if actor is None or actor.role != SystemRole.ADMIN.value:
            raise BizError("需要管理员权限", code=403)
        if not title or not title.strip():
            raise BizError("页面标题不能为空")
        page = PageRepository.create(title=title, content=content)
        PageRepository.commit()
        return page

    @staticmethod
    def get(page_id: int) -> Page:
        page = PageRepository.get_by_id(page_id)
        if not page:
            raise BizError("页面不存在", code=404)
        return page
