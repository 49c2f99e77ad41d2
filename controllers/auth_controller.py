# controllers/auth_controller.py
from flask import Blueprint, request
from services.user_service import UserService
from extensions.jwt import create_token, revoke_token
from controllers.auth_helpers import _extract_bearer
from utils.response import json_response


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True) or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    if not username or not password:
        return json_response(code=400, message="用户名密码必填")
    user = UserService.authenticate(username, password)
    if not user:
        return json_response(code=401, message="用户名或密码错误")
    token = create_token(user.id, user.username, user.role, user.password_version)
    return json_response(data={
        "token": token,
        "user": {
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "email": user.email
        }
    })


@auth_bp.post("/logout")
def logout():
    token = _extract_bearer(request.headers.get("Authorization"))
    if not token:
        return json_response(message="已退出登录")
    revoke_token(token)
    return json_response(message="已退出登录")
