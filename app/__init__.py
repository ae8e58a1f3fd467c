"""发票看板 - Flask 应用初始化.

基于 Flask 的发票管理看板, 提供发票的创建、编辑、删除与列表展示.
"""

import logging
from importlib import import_module
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import Blueprint, Flask
from flask.typing import ResponseReturnValue
from flask_caching import Cache
from flask_sqlalchemy import SQLAlchemy
from werkzeug.exceptions import HTTPException

from app.constants import FlashCategory
from app.errors import AppError
from app.infra.logging.request_middleware import register_request_logging
from app.services.cache_service import init_cache_service
from app.settings import Settings
from app.utils.response_utils import jsonify_unified_error
from app.utils.structlog_config import configure_structlog, get_system_logger, log_error

# 初始化扩展
db = SQLAlchemy()
cache = Cache()


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 注册蓝图
    configure_blueprints(app)

    # 配置日志
    configure_logging(app)

    # 配置统一日志系统
    configure_structlog(app)

    # 注册请求上下文与 wide event
    register_request_logging(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    # 注册全局错误处理器
    configure_error_handlers(app)

    # 配置模板过滤器
    configure_template_filters(app)

    get_system_logger().info(
        "应用初始化完成",
        module="system",
        environment=resolved_settings.environment,
        database_dialect=resolved_settings.database_uri.split(":", 1)[0],
    )
    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")
    if settings.environment.strip().lower() in {"testing", "test"}:
        app.config["TESTING"] = True


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库与缓存扩展.

    数据库引擎在首次使用时按 ``SQLALCHEMY_DATABASE_URI`` 与 ``SQLALCHEMY_ENGINE_OPTIONS`` 懒创建,
    会话在应用上下文结束时由 Flask-SQLAlchemy 回收.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,用于扩展初始化参数注入.

    """
    # 初始化数据库
    db.init_app(app)

    # 初始化缓存
    cache.init_app(app)

    # 初始化视图缓存服务
    init_cache_service(cache, default_ttl=settings.cache_view_ttl_seconds)


def close_database(app: Flask) -> None:
    """释放数据库连接池.

    在进程退出(wsgi 入口)或测试夹具清理时调用.

    Args:
        app: Flask 应用实例.

    """
    with app.app_context():
        db.session.remove()
        db.engine.dispose()
    get_system_logger().info("数据库连接池已释放", module="system")


def configure_blueprints(app: Flask) -> None:
    """注册所有蓝图以暴露路由.

    Args:
        app: Flask 应用实例.

    """
    blueprint_specs: list[tuple[str, str, str | None]] = [
        ("app.routes.main", "main_bp", None),
        ("app.routes.invoices", "invoices_bp", "/dashboard/invoices"),
        ("app.routes.health", "health_bp", "/health"),
    ]

    blueprints: list[tuple[Blueprint, str | None]] = []
    for module_path, attr_name, prefix in blueprint_specs:
        module = import_module(module_path)
        blueprint = getattr(module, attr_name)
        blueprints.append((blueprint, prefix))

    for blueprint, prefix in blueprints:
        if prefix:
            app.register_blueprint(blueprint, url_prefix=prefix)
        else:
            app.register_blueprint(blueprint)


def configure_logging(app: Flask) -> None:
    """配置日志系统与文件处理器.

    仅在非调试且非测试模式下写入滚动日志文件.

    Args:
        app: Flask 应用实例.

    """
    if not app.debug and not app.testing:
        # 创建日志目录
        log_path = Path(app.config["LOG_FILE"])
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # 配置文件日志处理器
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=app.config["LOG_MAX_SIZE"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
        )
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"),
        )
        file_handler.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        logging.getLogger().addHandler(file_handler)

        app.logger.setLevel(getattr(logging, app.config["LOG_LEVEL"]))
        app.logger.info("发票看板应用启动")


def configure_error_handlers(app: Flask) -> None:
    """注册全局错误处理器.

    HTTPException(包括跳转时中断请求携带的响应)原样返回,
    其余异常统一转换为 JSON 错误载荷.

    Args:
        app: Flask 应用实例.

    """

    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        if isinstance(error, HTTPException):
            return error.get_response()

        if not isinstance(error, AppError) or error.status_code >= 500:  # noqa: PLR2004
            log_error("请求处理异常", module="system", exception=error)
        return jsonify_unified_error(error)


def configure_template_filters(app: Flask) -> None:
    """注册金额与提示样式相关的模板过滤器.

    Args:
        app: Flask 应用实例.

    """

    @app.template_filter("cents")
    def cents_filter(amount: int | None) -> str:
        """将整数分格式化为带千分位的美元金额."""
        if amount is None:
            return ""
        return f"${amount / 100:,.2f}"

    @app.template_filter("flash_class")
    def flash_class_filter(category: str) -> str:
        """Flash 类别对应的样式类."""
        return FlashCategory.get_bootstrap_class(category)


from app.models import customer, invoice  # noqa: F401, E402
