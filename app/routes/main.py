"""发票看板 - 主要路由."""

from http import HTTPStatus

from flask import Blueprint, redirect, url_for

from app.types import RouteReturn

# 创建蓝图
main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index() -> RouteReturn:
    """首页 - 重定向到发票列表页.

    Returns:
        重定向响应到发票列表页.

    """
    return redirect(url_for("invoices.index"))


@main_bp.route("/favicon.ico")
def favicon() -> RouteReturn:
    """返回空响应,避免 404."""
    return "", HTTPStatus.NO_CONTENT
