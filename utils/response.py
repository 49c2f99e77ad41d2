# utils/response.py
from flask import jsonify


def json_response(message="success", data=None, code=200):
    """统一响应格式：{"code": HTTP 状态码, "message": 提示, "data": 数据}"""
    resp = jsonify({"code": code, "message": message, "data": data})
    resp.status_code = code
    return resp
