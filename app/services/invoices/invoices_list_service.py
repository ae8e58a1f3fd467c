"""发票列表读取 Service.

列表页数据经视图缓存读取, 缓存键与写操作失效使用的逻辑路径一致.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.constants import DashboardPaths
from app.repositories.customers_repository import CustomersRepository
from app.repositories.invoices_repository import InvoicesRepository
from app.services.cache_service import ViewCacheService, get_view_cache_service
from app.types.invoices import CustomerOption, InvoiceListItem
from app.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from app.models.invoice import Invoice

logger = get_logger("invoices_list_service")


class InvoicesListService:
    """发票列表读取服务."""

    def __init__(
        self,
        repository: InvoicesRepository | None = None,
        *,
        customers_repository: CustomersRepository | None = None,
        view_cache: ViewCacheService | None = None,
    ) -> None:
        self._repository = repository or InvoicesRepository()
        self._customers_repository = customers_repository or CustomersRepository()
        self._view_cache = view_cache or get_view_cache_service()

    def list_latest_invoices(self) -> list[InvoiceListItem]:
        """返回最近的发票列表, 优先使用缓存视图."""
        return self._view_cache.get_or_build(DashboardPaths.INVOICES, self._repository.list_latest_invoices)

    def list_customer_options(self) -> list[CustomerOption]:
        return self._customers_repository.list_customer_options()

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        """按 id 读取单张发票.

        id 无法被数据库解析(例如 UUID 列收到非法文本)时按不存在处理.

        Returns:
            Invoice | None: 发票不存在或 id 非法时为 None.

        """
        try:
            return self._repository.get_by_id(invoice_id)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.warning("读取发票失败, 按不存在处理", invoice_id=invoice_id, error=str(exc))
            return None


__all__ = ["InvoicesListService"]
