# extensions/redis_client.py
import os
import redis
from flask import current_app, has_app_context

_redis_client = None


def get_redis():
    global _redis_client
    if _redis_client is not None:
        return _redis_client
    if has_app_context():
        url = current_app.config.get("REDIS_URL")
    else:
        url = os.getenv("REDIS_URL", "redis://127.0.0.1:6379/0")
    _redis_client = redis.from_url(url, decode_responses=True)
    return _redis_client


def set_redis(client):
    """替换全局客户端（测试或多实例部署时注入）。"""
    global _redis_client
    _redis_client = client
