# app.py
from flask import Flask
from config.settings import get_config
from extensions.database import db, migrate
from extensions.logger import init_logger
from extensions.object_storage import init_object_storage
from controllers.test_case_controller import test_case_bp
from controllers.attachment_controller import attachment_bp
from repositories.test_case_repository import TestCaseRepository
from services.test_case_store import TestCaseStore
from utils.response import json_response
from utils.exceptions import BizError

import models  # noqa: F401  注册模型，供 create_all / Flask-Migrate 使用


def create_app(config_name="development", config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if config_overrides:
        app.config.update(config_overrides)

    # 初始化扩展
    db.init_app(app)
    migrate.init_app(app, db)
    init_logger(app)
    storage = init_object_storage(app)

    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            db.create_all()

    # 用例看板的缓存与同步层，整个应用共用一个
    app.extensions["test_case_store"] = TestCaseStore(
        TestCaseRepository(),
        storage,
        bucket=app.config["SCREENSHOT_BUCKET"],
    )

    # 用例看板
    app.register_blueprint(test_case_bp)
    # 截图访问（本地存储）
    app.register_blueprint(attachment_bp)

    # 错误处理
    @app.errorhandler(404)
    def not_found(e):
        return json_response(message="接口不存在", code=404)

    @app.errorhandler(500)
    def server_error(e):
        return json_response(message="服务器内部错误", code=500)

    @app.errorhandler(BizError)
    def _biz_err(e: BizError):
        return json_response(code=e.code, message=e.message, data=e.data)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="127.0.0.1", port=8888, debug=True)
