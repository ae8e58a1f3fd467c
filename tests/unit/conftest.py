# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离环境变量、测试应用与假协作者.
"""

import pytest

from app import close_database, create_app, db
from app.settings import Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部 Redis/PostgreSQL 等基础设施
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("POSTGRES_URL", "sqlite:///:memory:")
    monkeypatch.setenv("CACHE_TYPE", "simple")
    monkeypatch.delenv("CACHE_REDIS_URL", raising=False)
    monkeypatch.delenv("DB_SSL_MODE", raising=False)


@pytest.fixture(scope="function")
def app():
    """创建测试应用实例并建表, 结束时释放连接池."""
    app = create_app(settings=Settings.load())
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.rollback()
        db.drop_all()
    close_database(app)


@pytest.fixture(scope="function")
def app_context(app):
    """推入应用上下文."""
    with app.app_context():
        yield app


class NavigationRequested(Exception):
    """假跳转抛出的终止信号."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path


class RecordingNavigator:
    """记录跳转路径并中断流程的假 Navigator."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    def redirect(self, path: str):
        self.paths.append(path)
        raise NavigationRequested(path)


class RecordingCacheInvalidator:
    """记录失效路径的假 CacheInvalidator."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    def revalidate_path(self, path: str) -> None:
        self.paths.append(path)


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def cache_invalidator() -> RecordingCacheInvalidator:
    return RecordingCacheInvalidator()


@pytest.fixture
def navigation_requested() -> type[NavigationRequested]:
    """假 Navigator 抛出的异常类型."""
    return NavigationRequested
