# controllers/page_controller.py
from flask import Blueprint, request

from controllers.auth_helpers import auth_required, get_current_user, require_admin
from services.page_service import PageService
from utils.exceptions import BizError
from utils.response import json_response


page_bp = Blueprint("page", __name__, url_prefix="/api/pages")


@page_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message)


@page_bp.post("")
@auth_required()
@require_admin
def create_page():
    data = request.get_json(silent=True) or {}
    page = PageService.create(
        title=data.get("title"),
        content=data.get("content"),
        actor=get_current_user(),
    )
    return json_response(message="创建成功", data=page.to_dict(), code=201)


@page_bp.get("/<int:page_id>")
def get_page(page_id: int):
    page = PageService.get(page_id)
    return json_response(data=page.to_dict())
