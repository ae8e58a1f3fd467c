"""发票看板 - 视图缓存服务,提供统一的 Flask-Caching 接口.

看板视图按逻辑路径缓存, 写操作成功后通过 ``revalidate_path`` 标记过期,
下一次访问时重新计算. 缓存后端故障只记录告警, 不影响主流程.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from flask_caching import Cache
from redis.exceptions import RedisError

from app.utils.structlog_config import get_logger
from app.utils.time_utils import time_utils

logger = get_logger("cache_service")

ValueT = TypeVar("ValueT")

VIEW_CACHE_KEY_PREFIX = "invoice_board:view:"
DEFAULT_VIEW_TTL_SECONDS = 300

CACHE_EXCEPTIONS: tuple[type[Exception], ...] = (
    AttributeError,
    RuntimeError,
    ValueError,
    TypeError,
    OSError,
    RedisError,
)


class ViewCacheService:
    """视图缓存服务.

    Attributes:
        cache: Flask-Caching 实例, 未配置时所有读取都视为未命中.
        default_ttl: 默认缓存过期时间(秒).

    """

    def __init__(self, cache: Cache | None = None, *, default_ttl: int = DEFAULT_VIEW_TTL_SECONDS) -> None:
        """初始化视图缓存服务.

        Args:
            cache: 可选的 Flask-Caching 实例,未提供时延后注入.
            default_ttl: 默认缓存过期时间(秒).

        """
        self.cache = cache
        self.default_ttl = default_ttl

    @staticmethod
    def build_key(path: str) -> str:
        """生成视图缓存键.

        Args:
            path: 逻辑路径,例如 ``/dashboard/invoices``.

        Returns:
            格式为 ``invoice_board:view:<path>`` 的缓存键.

        """
        normalized = path.rstrip("/") or "/"
        return f"{VIEW_CACHE_KEY_PREFIX}{normalized}"

    def get_view(self, path: str) -> object | None:
        """读取缓存视图.

        Returns:
            缓存的视图数据,未命中或出错时返回 None.

        """
        if not self.cache:
            return None

        cache_key = self.build_key(path)
        try:
            cached = self.cache.get(cache_key)
        except CACHE_EXCEPTIONS as exc:
            logger.warning("读取视图缓存失败", path=path, cache_key=cache_key, error=str(exc))
            return None

        if not isinstance(cached, dict) or "payload" not in cached:
            return None
        logger.debug("视图缓存命中", path=path, cached_at=cached.get("cached_at"))
        return cached["payload"]

    def set_view(self, path: str, payload: object, ttl: int | None = None) -> bool:
        """写入缓存视图.

        Args:
            path: 逻辑路径.
            payload: 需要缓存的视图数据,必须可被缓存后端序列化.
            ttl: 缓存过期时间(秒),默认使用 ``default_ttl``.

        Returns:
            成功返回 True,失败返回 False.

        """
        if not self.cache:
            return False

        cache_key = self.build_key(path)
        entry = {"payload": payload, "cached_at": time_utils.now().isoformat()}
        try:
            self.cache.set(cache_key, entry, timeout=self.default_ttl if ttl is None else ttl)
        except CACHE_EXCEPTIONS as exc:
            logger.warning("写入视图缓存失败", path=path, cache_key=cache_key, error=str(exc))
            return False
        return True

    def get_or_build(self, path: str, builder: Callable[[], ValueT], ttl: int | None = None) -> ValueT:
        """优先返回缓存视图,未命中时调用 builder 计算并回写.

        builder 抛出的异常不会被吞掉.
        """
        cached = self.get_view(path)
        if cached is not None:
            return cached  # type: ignore[return-value]

        payload = builder()
        self.set_view(path, payload, ttl)
        return payload

    def revalidate_path(self, path: str) -> None:
        """标记逻辑路径下的缓存视图为过期.

        Args:
            path: 逻辑路径.

        """
        if not self.cache:
            return

        cache_key = self.build_key(path)
        try:
            self.cache.delete(cache_key)
        except CACHE_EXCEPTIONS as exc:
            logger.warning("视图缓存失效失败", path=path, cache_key=cache_key, error=str(exc))
            return
        logger.info("视图缓存已失效", path=path, cache_key=cache_key)


view_cache_service: ViewCacheService | None = None


def init_cache_service(cache: Cache, *, default_ttl: int = DEFAULT_VIEW_TTL_SECONDS) -> ViewCacheService:
    """初始化视图缓存服务.

    Args:
        cache: Flask-Caching 实例.
        default_ttl: 默认缓存过期时间(秒).

    Returns:
        初始化后的 ViewCacheService 实例.

    """
    service = ViewCacheService(cache, default_ttl=default_ttl)
    globals()["view_cache_service"] = service
    logger.info("视图缓存服务初始化完成", default_ttl=default_ttl)
    return service


def get_view_cache_service() -> ViewCacheService:
    """返回已初始化的视图缓存服务,未初始化时返回空实现."""
    return view_cache_service or ViewCacheService()


__all__ = [
    "CACHE_EXCEPTIONS",
    "ViewCacheService",
    "get_view_cache_service",
    "init_cache_service",
]
