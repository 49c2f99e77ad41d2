# controllers/auth_helpers.py
from __future__ import annotations

from functools import wraps

from flask import g, request

from constants.roles import SystemRole
from extensions.jwt import decode_token, TokenExpired
from repositories.user_repository import UserRepository
from utils.response import json_response


def _extract_bearer(auth_header: str | None) -> str | None:
    if not auth_header:
        return None
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        return token or None
    return None


def _resolve_user_from_token(token: str):
    """
    解析 token 并返回 user 对象。
    失败时抛出 (code, message) 的 ValueError，供调用方决定如何返回。
    """
    try:
        payload = decode_token(token)
    except TokenExpired:
        raise ValueError(("TOKEN_EXPIRED", "登录状态已失效，请重新登录"))
    except ValueError:
        raise ValueError(("TOKEN_INVALID", "Token 无效或已过期"))

    user_id = payload.get("sub")
    if user_id is None:
        raise ValueError(("TOKEN_PAYLOAD_INVALID", "Token 载荷无效"))
    user = UserRepository.find_by_id(user_id)
    if not user or not getattr(user, "active", False):
        raise ValueError(("USER_NOT_FOUND", "用户不存在或被禁用"))

    token_pwdv = payload.get("pwdv")
    if token_pwdv is None or token_pwdv != user.password_version:
        raise ValueError(("TOKEN_EXPIRED", "登录状态已失效，请重新登录"))

    return user


def _error_of(ve: ValueError):
    return ve.args[0] if isinstance(ve.args[0], tuple) else ("TOKEN_ERROR", "认证失败")


def auth_required():
    """
    鉴权装饰器：
      - 验证 Authorization: Bearer <token>
      - 解析 token -> user，注入 g.current_user
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.current_user = None
            token = _extract_bearer(request.headers.get("Authorization"))
            if not token:
                return json_response(code=401, message="缺少或无效 Authorization")
            try:
                user = _resolve_user_from_token(token)
            except ValueError as ve:
                _code, msg = _error_of(ve)
                return json_response(code=401, message=msg)

            g.current_user = user
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def optional_auth(tolerate_invalid: bool = False):
    """
    可选鉴权：
      - 无 Authorization：g.current_user = None，继续
      - 有 Authorization 且有效：注入 g.current_user
      - 有 Authorization 但无效：默认返回 401；
        tolerate_invalid=True 时按未登录继续，并在 g.auth_expired 标记登录是否已失效
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.current_user = None
            g.auth_expired = False
            token = _extract_bearer(request.headers.get("Authorization"))
            if token is None:
                return fn(*args, **kwargs)
            try:
                user = _resolve_user_from_token(token)
            except ValueError as ve:
                code, msg = _error_of(ve)
                if not tolerate_invalid:
                    return json_response(code=401, message=msg)
                g.auth_expired = code in ("TOKEN_EXPIRED", "USER_NOT_FOUND")
                return fn(*args, **kwargs)
            g.current_user = user
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def require_admin(fn):
    """依赖 @auth_required 预先注入的 g.current_user。"""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = getattr(g, "current_user", None)
        if not user:
            return json_response(code=401, message="未登录")
        if user.role != SystemRole.ADMIN.value:
            return json_response(code=403, message="需要管理员权限")
        return fn(*args, **kwargs)

    return wrapper


def get_current_user(default=None):
    return getattr(g, "current_user", default)
