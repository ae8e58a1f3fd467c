"""发票写操作 Service.

职责:
- 编排创建/更新/删除发票: 取参 -> 校验 -> 金额换算 -> 落库 -> 缓存失效 -> 跳转
- 每个操作只执行一条语句并立即提交, 失败时回滚
- 缓存失效与跳转通过注入的协作者完成
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING, NoReturn

from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.constants import DashboardPaths, ErrorMessages
from app.repositories.invoices_repository import InvoicesRepository
from app.schemas.invoices import INVOICE_FORM_FIELDS
from app.schemas.validation import validate_invoice_form
from app.services.invoices.form_state import InvoiceFormState
from app.utils.request_payload import extract_form_fields
from app.utils.structlog_config import log_error, log_info
from app.utils.time_utils import time_utils

if TYPE_CHECKING:
    from app.types.invoices import CacheInvalidator, FormPayload, Navigator

MODULE = "invoices"


class InvoiceActionsService:
    """发票写操作服务.

    Attributes:
        listing_path: 写操作成功后失效并跳转的列表页逻辑路径.

    """

    listing_path = DashboardPaths.INVOICES

    def __init__(
        self,
        repository: InvoicesRepository | None = None,
        *,
        cache_invalidator: CacheInvalidator,
        navigator: Navigator,
        today: Callable[[], date] | None = None,
    ) -> None:
        """初始化写操作服务.

        Args:
            repository: 发票 Repository,默认使用 InvoicesRepository.
            cache_invalidator: 视图缓存失效协作者.
            navigator: 浏览器跳转协作者.
            today: 返回当前日期的函数,默认取 UTC 当天.

        """
        self._repository = repository or InvoicesRepository()
        self._cache_invalidator = cache_invalidator
        self._navigator = navigator
        self._today = today or time_utils.today

    def create_invoice(self, prev_state: InvoiceFormState | None, form_data: FormPayload) -> InvoiceFormState:
        """创建发票.

        Args:
            prev_state: 表单上一次的状态,当前不参与计算.
            form_data: 表单数据(MultiDict 或 mapping).

        Returns:
            InvoiceFormState: 仅在校验失败或落库失败时返回. 成功时跳转到列表页, 不会返回.

        """
        del prev_state
        candidate = extract_form_fields(form_data, INVOICE_FORM_FIELDS)
        result = validate_invoice_form(candidate)
        if not result.success or result.data is None:
            log_info(
                "创建发票表单校验失败",
                module=MODULE,
                action="create_invoice",
                invalid_fields=sorted(result.errors),
            )
            return InvoiceFormState(errors=result.errors, message=ErrorMessages.CREATE_INVOICE_MISSING_FIELDS)

        payload = result.data
        amount_in_cents = payload.amount_in_cents
        invoice_date = self._today()

        try:
            invoice_id = self._repository.insert_invoice(
                customer_id=payload.customer_id,
                amount=amount_in_cents,
                status=payload.status,
                invoice_date=invoice_date,
            )
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_error(
                "创建发票失败",
                module=MODULE,
                exception=exc,
                action="create_invoice",
                customer_id=payload.customer_id,
            )
            return InvoiceFormState(message=ErrorMessages.CREATE_INVOICE_DATABASE_ERROR)

        log_info(
            "创建发票成功",
            module=MODULE,
            action="create_invoice",
            invoice_id=invoice_id,
            customer_id=payload.customer_id,
            amount=amount_in_cents,
            status=payload.status,
            invoice_date=invoice_date.isoformat(),
        )
        self._finish_write()

    def update_invoice(
        self,
        invoice_id: str,
        prev_state: InvoiceFormState | None,
        form_data: FormPayload,
    ) -> InvoiceFormState:
        """更新发票的客户、金额与状态.

        id 不存在时不视为错误, 仍然失效缓存并跳转.

        Args:
            invoice_id: 发票 id.
            prev_state: 表单上一次的状态,当前不参与计算.
            form_data: 表单数据(MultiDict 或 mapping).

        Returns:
            InvoiceFormState: 仅在校验失败或落库失败时返回.

        """
        del prev_state
        candidate = extract_form_fields(form_data, INVOICE_FORM_FIELDS)
        result = validate_invoice_form(candidate)
        if not result.success or result.data is None:
            log_info(
                "更新发票表单校验失败",
                module=MODULE,
                action="update_invoice",
                invoice_id=invoice_id,
                invalid_fields=sorted(result.errors),
            )
            return InvoiceFormState(errors=result.errors, message=ErrorMessages.UPDATE_INVOICE_MISSING_FIELDS)

        payload = result.data
        amount_in_cents = payload.amount_in_cents

        try:
            matched_rows = self._repository.update_invoice(
                invoice_id,
                customer_id=payload.customer_id,
                amount=amount_in_cents,
                status=payload.status,
            )
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_error(
                "更新发票失败",
                module=MODULE,
                exception=exc,
                action="update_invoice",
                invoice_id=invoice_id,
            )
            return InvoiceFormState(message=ErrorMessages.UPDATE_INVOICE_DATABASE_ERROR)

        log_info(
            "更新发票完成",
            module=MODULE,
            action="update_invoice",
            invoice_id=invoice_id,
            matched_rows=matched_rows,
            amount=amount_in_cents,
            status=payload.status,
        )
        self._finish_write()

    def delete_invoice(self, invoice_id: str) -> None:
        """删除发票.

        落库失败只记录错误日志, 不向调用方抛出. 无论成功与否都会失效列表页缓存.

        Args:
            invoice_id: 发票 id.

        """
        try:
            matched_rows = self._repository.delete_invoice(invoice_id)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_error(
                "删除发票失败",
                module=MODULE,
                exception=exc,
                action="delete_invoice",
                invoice_id=invoice_id,
            )
        else:
            log_info(
                "删除发票完成",
                module=MODULE,
                action="delete_invoice",
                invoice_id=invoice_id,
                matched_rows=matched_rows,
            )
        self._cache_invalidator.revalidate_path(self.listing_path)

    def _finish_write(self) -> NoReturn:
        self._cache_invalidator.revalidate_path(self.listing_path)
        self._navigator.redirect(self.listing_path)


__all__ = ["InvoiceActionsService"]
