"""发票看板 - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失关键密钥/连接串会直接抛出 ValueError.
- 数据库连接必须走加密传输,PostgreSQL 连接统一注入 `sslmode`.
"""

from __future__ import annotations

import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "1.0.0"

DEFAULT_DB_CONNECTION_TIMEOUT_SECONDS = 30
DEFAULT_DB_MAX_CONNECTIONS = 20
DEFAULT_SQLALCHEMY_POOL_RECYCLE_SECONDS = 300
DEFAULT_SQLALCHEMY_MAX_OVERFLOW = 10
DEFAULT_DB_SSL_MODE = "require"
ENCRYPTED_SSL_MODES = ("require", "verify-ca", "verify-full")

DEFAULT_CACHE_TYPE = "simple"
# Flask-Caching 2.x 仅接受后端类名
CACHE_BACKEND_CLASSES = {"simple": "SimpleCache", "redis": "RedisCache"}
DEFAULT_CACHE_DEFAULT_TIMEOUT_SECONDS = 300
DEFAULT_CACHE_VIEW_TTL_SECONDS = 300
DEFAULT_CACHE_REDIS_URL = "redis://localhost:6379/0"

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "userdata/logs/app.log"
DEFAULT_LOG_MAX_SIZE_BYTES = 10 * 1024 * 1024
DEFAULT_LOG_BACKUP_COUNT = 5

_POSTGRES_URL_PREFIXES = ("postgres://", "postgresql://")
_POSTGRES_DRIVER_PREFIX = "postgresql+psycopg://"


def _resolve_sqlite_fallback_url() -> str:
    db_path = _resolve_sqlite_fallback_path()
    return f"sqlite:///{db_path.absolute()}"


def _resolve_sqlite_fallback_path() -> Path:
    return PROJECT_ROOT / "userdata" / "invoice_board_dev.db"


def _normalize_postgres_url(url: str) -> str:
    """将 postgres:// 与 postgresql:// 统一改写为 psycopg 驱动."""
    for prefix in _POSTGRES_URL_PREFIXES:
        if url.startswith(prefix):
            return _POSTGRES_DRIVER_PREFIX + url[len(prefix) :]
    return url


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="Invoice Board", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    postgres_url: str = Field(default="", validation_alias="POSTGRES_URL")
    db_connection_timeout_seconds: int = Field(
        default=DEFAULT_DB_CONNECTION_TIMEOUT_SECONDS,
        validation_alias="DB_CONNECTION_TIMEOUT",
    )
    db_max_connections: int = Field(default=DEFAULT_DB_MAX_CONNECTIONS, validation_alias="DB_MAX_CONNECTIONS")
    db_ssl_mode: str = Field(default=DEFAULT_DB_SSL_MODE, validation_alias="DB_SSL_MODE")

    cache_type: str = Field(default=DEFAULT_CACHE_TYPE, validation_alias="CACHE_TYPE")
    cache_redis_url: str | None = Field(default=None, validation_alias="CACHE_REDIS_URL")
    cache_default_timeout_seconds: int = Field(
        default=DEFAULT_CACHE_DEFAULT_TIMEOUT_SECONDS,
        validation_alias="CACHE_DEFAULT_TIMEOUT",
    )
    cache_view_ttl_seconds: int = Field(default=DEFAULT_CACHE_VIEW_TTL_SECONDS, validation_alias="CACHE_VIEW_TTL")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    log_file: str = Field(default=DEFAULT_LOG_FILE, validation_alias="LOG_FILE")
    log_max_size_bytes: int = Field(default=DEFAULT_LOG_MAX_SIZE_BYTES, validation_alias="LOG_MAX_SIZE")
    log_backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, validation_alias="LOG_BACKUP_COUNT")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    @field_validator("cache_type", "db_ssl_mode")
    @classmethod
    def _normalize_lower(cls, value: str) -> str:
        return value.lower()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("cache_redis_url", mode="before")
    @classmethod
    def _strip_blank_to_none(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip() or None
        return value

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def database_uri(self) -> str:
        """SQLAlchemy 使用的连接串(已改写驱动前缀)."""
        return _normalize_postgres_url(self.postgres_url)

    @property
    def sqlalchemy_engine_options(self) -> dict[str, object]:
        """生成 SQLAlchemy Engine 配置选项."""
        if self.database_uri.startswith("sqlite"):
            return {"pool_pre_ping": True, "connect_args": {"check_same_thread": False}}
        return {
            "pool_pre_ping": True,
            "pool_recycle": DEFAULT_SQLALCHEMY_POOL_RECYCLE_SECONDS,
            "pool_timeout": self.db_connection_timeout_seconds,
            "max_overflow": DEFAULT_SQLALCHEMY_MAX_OVERFLOW,
            "pool_size": self.db_max_connections,
            "connect_args": {"sslmode": self.db_ssl_mode},
            "echo": bool(self.debug and self.enable_debug_log),
        }

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        payload: dict[str, object] = {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_uri,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_ENGINE_OPTIONS": dict(self.sqlalchemy_engine_options),
            "CACHE_TYPE": CACHE_BACKEND_CLASSES[self.cache_type],
            "CACHE_DEFAULT_TIMEOUT": self.cache_default_timeout_seconds,
            "CACHE_VIEW_TTL": self.cache_view_ttl_seconds,
            "LOG_LEVEL": self.log_level,
            "LOG_FILE": self.log_file,
            "LOG_MAX_SIZE": self.log_max_size_bytes,
            "LOG_BACKUP_COUNT": self.log_backup_count,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
        }
        if self.cache_type == "redis" and self.cache_redis_url:
            payload["CACHE_REDIS_URL"] = self.cache_redis_url
        return payload

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)
        self._ensure_postgres_url(environment_normalized)
        self._normalize_cache_redis_url(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if self.secret_key:
            return
        if not debug:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
        logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _ensure_postgres_url(self, environment_normalized: str) -> None:
        if self.postgres_url:
            return
        if environment_normalized == "production":
            raise ValueError("POSTGRES_URL environment variable must be set in production")

        object.__setattr__(self, "postgres_url", _resolve_sqlite_fallback_url())
        if environment_normalized not in {"testing", "test"}:
            logger.warning(
                "⚠️  未设置 POSTGRES_URL, 非 production 环境将回退 SQLite (sqlite_db_file=%s)",
                _resolve_sqlite_fallback_path().name,
            )

    def _normalize_cache_redis_url(self, environment_normalized: str) -> None:
        if self.cache_type != "redis":
            if self.cache_redis_url is not None:
                object.__setattr__(self, "cache_redis_url", None)
            return

        if self.cache_redis_url:
            return
        if environment_normalized == "production":
            raise ValueError("CACHE_REDIS_URL must be set when CACHE_TYPE=redis in production")
        object.__setattr__(self, "cache_redis_url", DEFAULT_CACHE_REDIS_URL)

    def _validate(self) -> None:
        """执行跨字段校验,统一抛出可读的 ValueError."""
        errors: list[str] = []
        checks: list[tuple[str, bool]] = [
            ("DB_CONNECTION_TIMEOUT 必须为正整数", self.db_connection_timeout_seconds <= 0),
            ("DB_MAX_CONNECTIONS 必须为正整数", self.db_max_connections <= 0),
            (
                f"DB_SSL_MODE 仅支持 {'/'.join(ENCRYPTED_SSL_MODES)}",
                self.db_ssl_mode not in ENCRYPTED_SSL_MODES,
            ),
            ("CACHE_TYPE 仅支持 simple/redis", self.cache_type not in CACHE_BACKEND_CLASSES),
            ("CACHE_DEFAULT_TIMEOUT 不能为负数", self.cache_default_timeout_seconds < 0),
            ("CACHE_VIEW_TTL 不能为负数", self.cache_view_ttl_seconds < 0),
            ("LOG_MAX_SIZE 必须为正整数", self.log_max_size_bytes <= 0),
            ("LOG_BACKUP_COUNT 不能为负数", self.log_backup_count < 0),
            (
                "LOG_LEVEL 仅支持 DEBUG/INFO/WARNING/ERROR/CRITICAL",
                self.log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
            ),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)

        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
