"""发票看板 - 发票管理路由."""

from __future__ import annotations

from flask import Blueprint, flash, render_template, request

from app.constants import FlashCategory, HttpStatus, InvoiceStatus
from app.errors import NotFoundError
from app.infra.navigation import FlaskNavigator
from app.infra.route_safety import log_with_context
from app.services.cache_service import get_view_cache_service
from app.services.invoices import InvoiceActionsService, InvoiceFormState, InvoicesListService
from app.types import RouteReturn

# 创建蓝图
invoices_bp = Blueprint("invoices", __name__)

MODULE = "invoices"


def _build_actions_service() -> InvoiceActionsService:
    return InvoiceActionsService(
        cache_invalidator=get_view_cache_service(),
        navigator=FlaskNavigator(),
    )


def _render_listing() -> str:
    invoices = InvoicesListService().list_latest_invoices()
    return render_template("invoices/index.html", invoices=invoices, status_labels=InvoiceStatus.LABELS)


def _render_form(
    *,
    state: InvoiceFormState,
    form_values: dict[str, object],
    invoice_id: str | None = None,
) -> str:
    customers = InvoicesListService().list_customer_options()
    return render_template(
        "invoices/form.html",
        state=state,
        form_values=form_values,
        customers=customers,
        statuses=InvoiceStatus.ALL,
        status_labels=InvoiceStatus.LABELS,
        invoice_id=invoice_id,
    )


@invoices_bp.route("")
def index() -> RouteReturn:
    """发票列表页.

    Returns:
        str: 渲染后的列表页 HTML.

    """
    return _render_listing()


@invoices_bp.route("/create", methods=["GET", "POST"])
def create() -> RouteReturn:
    """创建发票.

    GET 渲染空表单; POST 执行创建, 成功时跳转到列表页, 失败时回显表单.
    """
    if request.method == "GET":
        return _render_form(state=InvoiceFormState.initial(), form_values={})

    state = _build_actions_service().create_invoice(InvoiceFormState.initial(), request.form)
    log_with_context(
        "info",
        "创建发票失败,回显表单",
        module=MODULE,
        action="create",
        context={"invalid_fields": sorted(state.errors)},
    )
    if state.message:
        flash(state.message, FlashCategory.ERROR)
    return _render_form(state=state, form_values=request.form.to_dict())


@invoices_bp.route("/<invoice_id>/edit", methods=["GET", "POST"])
def edit(invoice_id: str) -> RouteReturn:
    """编辑发票.

    Raises:
        NotFoundError: GET 请求的发票不存在时抛出.

    """
    if request.method == "GET":
        invoice = InvoicesListService().get_invoice(invoice_id)
        if invoice is None:
            raise NotFoundError(message_key="INVOICE_NOT_FOUND", extra={"invoice_id": invoice_id})
        form_values: dict[str, object] = {
            "customerId": invoice.customer_id,
            "amount": f"{invoice.amount / 100:.2f}",
            "status": invoice.status,
        }
        return _render_form(state=InvoiceFormState.initial(), form_values=form_values, invoice_id=invoice_id)

    state = _build_actions_service().update_invoice(invoice_id, InvoiceFormState.initial(), request.form)
    log_with_context(
        "info",
        "更新发票失败,回显表单",
        module=MODULE,
        action="edit",
        context={"invoice_id": invoice_id, "invalid_fields": sorted(state.errors)},
    )
    if state.message:
        flash(state.message, FlashCategory.ERROR)
    return _render_form(state=state, form_values=request.form.to_dict(), invoice_id=invoice_id)


@invoices_bp.route("/<invoice_id>/delete", methods=["POST"])
def delete(invoice_id: str) -> RouteReturn:
    """删除发票并原地重新渲染列表页."""
    _build_actions_service().delete_invoice(invoice_id)
    return _render_listing(), HttpStatus.OK
