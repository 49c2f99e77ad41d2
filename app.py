# app.py
from flask import Flask
from config.settings import get_config
from extensions.database import db, migrate
from extensions.logger import init_logger
from extensions.mailer import mailer
from controllers.auth_controller import auth_bp
from controllers.comment_controller import comment_bp, comment_public_bp
from controllers.page_controller import page_bp
from models.page import Page
from repositories.comment_repository import CommentRepository
from services.comment_notification_service import CommentNotificationService
from services.parent_registry import ModelParentResolver, parent_registry
from services.user_service import UserService
from utils.response import json_response
from utils.exceptions import BizError


def register_commentable_types():
    """可评论内容类型在此登记，评论的 parent_type 即这里的标签。"""
    parent_registry.register("page", ModelParentResolver(Page))


def create_app(config_name="development"):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    mailer.init_app(app)
    init_logger(app)

    register_commentable_types()
    CommentRepository.register_after_persist(CommentNotificationService.on_after_persist)

    if not app.config.get("TESTING"):
        try:
            # 首次init时表还没创建，需要先 upgrade
            with app.app_context():
                UserService.ensure_default_admin(app)
        except Exception as e:
            app.logger.warning("首次init需要等待表结构创建完成后才能添加默认管理员: %s", e)

    # 登录
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    # 可评论内容
    app.register_blueprint(page_bp)
    # 评论 / 订阅通知
    app.register_blueprint(comment_bp)
    app.register_blueprint(comment_public_bp)

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        if isinstance(e, BizError):
            return _biz_err(e)
        return json_response(message="接口不存在", code=404)

    @app.errorhandler(500)
    def server_error(e):
        if isinstance(e, BizError):
            return _biz_err(e)
        return json_response(message="服务器内部错误", code=500)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return json_response(code=e.code, message=e.message, data=e.data)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="127.0.0.1", port=8888, debug=True)
