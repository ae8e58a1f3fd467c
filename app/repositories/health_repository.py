"""数据库连通性探测 Repository.

只执行探测语句, 不 commit.
"""

from __future__ import annotations

from sqlalchemy import text

from app import db


class HealthRepository:
    """数据库连通性探测."""

    @staticmethod
    def ping_database() -> str:
        """执行 ``SELECT 1`` 并返回当前数据库方言名称."""
        db.session.execute(text("SELECT 1"))
        return db.engine.dialect.name
