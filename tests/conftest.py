import time
import uuid
from typing import Any, Dict, Optional, Tuple

import pytest

from app import create_app
from constants.roles import SystemRole
from extensions.database import db
from extensions.jwt import create_token
from extensions.mailer import mailer
from extensions.redis_client import set_redis
from models import Comment, Page, User
from repositories.comment_repository import CommentRepository
from utils.password import hash_password


class InMemoryRedis:
    """测试用的 Redis 替身，只实现本项目用到的命令。"""

    def __init__(self):
        self._store: Dict[str, Tuple[Any, Optional[float]]] = {}

    def get(self, name):
        item = self._store.get(name)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and expires_at <= time.time():
            self._store.pop(name, None)
            return None
        return value

    def setex(self, name, time_to_live, value):
        self._store[name] = (value, time.time() + int(time_to_live))
        return True

    def getdel(self, name):
        value = self.get(name)
        self._store.pop(name, None)
        return value


@pytest.fixture()
def app():
    """提供测试用的 Flask 应用上下文（使用内存数据库）。"""
    app = create_app("testing")
    set_redis(InMemoryRedis())
    mailer.outbox.clear()
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
    set_redis(None)
    mailer.outbox.clear()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def outbox(app):
    return mailer.outbox


@pytest.fixture()
def make_user(app):
    def _create(username=None, email=None, role=SystemRole.USER.value, password="Passw0rd!"):
        username = username or f"user_{uuid.uuid4().hex[:8]}"
        user = User(
            username=username,
            password_hash=hash_password(password),
            email=email,
            role=role,
            active=True,
            password_version=1,
        )
        db.session.add(user)
        db.session.commit()
        return user
    return _create


@pytest.fixture()
def make_page(app):
    def _create(title="测试页面"):
        page = Page(title=title, content="正文")
        db.session.add(page)
        db.session.commit()
        return page
    return _create


@pytest.fixture()
def make_comment(app):
    """经由 CommentRepository.write 写入，after-persist 回调照常触发。"""
    def _create(parent, author=None, moderated=False, notify=False, content="一条评论", parent_type="page"):
        comment = Comment(
            parent_type=parent_type,
            parent_id=parent.id if hasattr(parent, "id") else parent,
            author_user_id=author.id if author is not None else None,
            author_name=author.username if author is not None else "访客",
            author_email=author.email if author is not None else None,
            content=content,
            moderated=moderated,
            notify_of_updates=notify,
        )
        CommentRepository.write(comment)
        return comment
    return _create


@pytest.fixture()
def auth_headers(app):
    def _headers(user, expires_seconds=None):
        token = create_token(user.id, user.username, user.role, user.password_version,
                             expires_seconds=expires_seconds)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture()
def alice(make_user):
    return make_user("alice", "alice@x.com")


@pytest.fixture()
def bob(make_user):
    return make_user("bob", "bob@y.com")


@pytest.fixture()
def admin(make_user):
    return make_user("root", "root@example.com", role=SystemRole.ADMIN.value)
