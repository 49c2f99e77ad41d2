# utils/exceptions.py
from typing import Any, Dict, Optional
from werkzeug.exceptions import HTTPException


class BizError(HTTPException):
    code: int  # HTTP 状态码
    message: str  # 业务提示
    data: Optional[Any]  # 附加数据

    def __init__(self, message: str = "业务异常", code: int = 400, data: Any = None):
        self.code = code
        self.message = message
        self.data = data
        super().__init__(description=message)


class PermissionFailure(BizError):
    """
    权限不足（需要登录或换号登录）。
    messages 携带三种文案：default / already_logged_in / log_in_again，
    reason 指明本次命中的是哪一种，message 即对应文案。
    """

    def __init__(self, reason: str, messages: Dict[str, str], login_url: str = "/login",
                 back_url: Optional[str] = None):
        self.reason = reason
        self.messages = messages
        self.login_url = login_url
        self.back_url = back_url
        # 已登录但身份不符 => 403；未登录 / 登录失效 => 401
        code = 403 if reason == "already_logged_in" else 401
        super().__init__(
            message=messages.get(reason) or messages.get("default", "无权限"),
            code=code,
            data={
                "reason": reason,
                "messages": dict(messages),
                "login_url": login_url,
                "back_url": back_url,
            },
        )
