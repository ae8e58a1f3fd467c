"""发票看板 - 健康检查路由."""

import time

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.constants import HttpStatus
from app.infra.route_safety import log_with_context
from app.repositories.health_repository import HealthRepository
from app.types import RouteReturn
from app.utils.time_utils import time_utils

# 创建蓝图
health_bp = Blueprint("health", __name__)


@health_bp.route("/ping")
def ping() -> RouteReturn:
    """存活探针,不访问任何外部依赖."""
    return jsonify({"status": "ok", "timestamp": time_utils.now().isoformat()})


@health_bp.route("/database")
def database() -> RouteReturn:
    """数据库健康检查.

    Returns:
        JSON 响应. 数据库可用时返回 200, 否则返回 503.

    """
    started_at = time.perf_counter()
    try:
        dialect = HealthRepository.ping_database()
    except SQLAlchemyError as exc:
        db.session.rollback()
        log_with_context(
            "warning",
            "数据库健康检查失败",
            module="health",
            action="database",
            extra={"error_message": str(exc)},
        )
        return jsonify({"status": "unhealthy", "database": "unavailable"}), HttpStatus.SERVICE_UNAVAILABLE

    response_time_ms = round((time.perf_counter() - started_at) * 1000, 2)
    return jsonify({"status": "healthy", "database": dialect, "response_time_ms": response_time_ms})
