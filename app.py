"""发票看板 - 本地开发环境启动文件."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final

# 添加项目根目录到 Python 路径
PROJECT_ROOT: Final[Path] = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from app import close_database, create_app, db  # noqa: E402
from app.utils.structlog_config import get_system_logger  # noqa: E402

if TYPE_CHECKING:
    from flask import Flask

os.environ.setdefault("FLASK_APP", "app")
os.environ.setdefault("FLASK_ENV", "development")

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[str] = "5001"
DEFAULT_DEBUG: Final[str] = "true"


def _ensure_local_schema(flask_app: Flask) -> None:
    """本地 SQLite 回退库首次启动时建表, PostgreSQL 表结构由外部维护."""
    with flask_app.app_context():
        if db.engine.dialect.name == "sqlite":
            db.create_all()


def _load_runtime_config() -> tuple[str, int, bool]:
    """读取开发服务器运行参数."""
    host = os.environ.get("FLASK_HOST") or DEFAULT_HOST
    port = int(os.environ.get("FLASK_PORT", DEFAULT_PORT))
    debug = os.environ.get("FLASK_DEBUG", DEFAULT_DEBUG).lower() == "true"
    return host, port, debug


def main() -> None:
    """启动 Flask 开发服务器."""
    app = create_app()
    host, port, debug = _load_runtime_config()
    _ensure_local_schema(app)
    get_system_logger().info("发票看板开发环境已启动", host=host, port=port, debug=debug)
    get_system_logger().info("访问入口", url=f"http://{host}:{port}/dashboard/invoices")

    try:
        app.run(host=host, port=port, debug=debug, threaded=True, use_reloader=False)
    finally:
        close_database(app)


if __name__ == "__main__":
    main()
