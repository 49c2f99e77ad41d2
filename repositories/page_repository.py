# repositories/page_repository.py
from typing import Optional

from extensions.database import db
from models.page import Page


class PageRepository:
    @staticmethod
    def create(title: str, content: Optional[str]) -> Page:
        page = Page(title=title.strip(), content=content)
        db.session.add(page)
        db.session.flush()
        return page

    @staticmethod
    def get_by_id(page_id: int) -> Optional[Page]:
        return db.session.get(Page, page_id)

    @staticmethod
    def commit():
        db.session.commit()
