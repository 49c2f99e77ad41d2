# services/user_service.py
from typing import Optional

from models.user import User
from repositories.user_repository import UserRepository
from utils.password import hash_password, verify_password
from constants.roles import SystemRole


class UserService:

    @staticmethod
    def authenticate(username: str, password: str) -> Optional[User]:
        user = UserRepository.find_by_username(username)
        if not user or not user.active:
            return None
        if not verify_password(user.password_hash, password):
            return None
        return user

    @staticmethod
    def ensure_default_admin(app):
        uname = app.config["ADMIN_INIT_USERNAME"]
        if not UserRepository.find_by_username(uname):
            user = User(
                username=uname,
                password_hash=hash_password(app.config["ADMIN_INIT_PASSWORD"]),
                email=app.config["ADMIN_INIT_EMAIL"],
                role=SystemRole.ADMIN.value,
                active=True
            )
            UserRepository.add(user)
            UserRepository.commit()
            app.logger.info("默认管理员已创建: %s", uname)
