"""发票写路径 schema.

表单只提交 customerId/amount/status 三个字段, id 与 date 由写操作自行派生.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import Field, field_validator

from app.constants import ErrorMessages, InvoiceStatus
from app.schemas.base import PayloadSchema

INVOICE_FORM_FIELDS: tuple[str, ...] = ("customerId", "amount", "status")
_MINOR_UNITS_PER_MAJOR = Decimal(100)
# invoices.amount 为 32 位 INTEGER 列
MAX_AMOUNT_MINOR_UNITS = 2_147_483_647
_MAX_AMOUNT_MAGNITUDE = 8


def _validate_customer_id(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(ErrorMessages.CUSTOMER_REQUIRED)
    return value.strip()


def _parse_amount(value: Any) -> Decimal:
    # bool 是 int 的子类, 需单独排除
    if value is None or isinstance(value, bool):
        raise ValueError(ErrorMessages.AMOUNT_NOT_POSITIVE)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(ErrorMessages.AMOUNT_NOT_POSITIVE) from None
    else:
        raise ValueError(ErrorMessages.AMOUNT_NOT_POSITIVE)

    if not amount.is_finite() or amount <= 0:
        raise ValueError(ErrorMessages.AMOUNT_NOT_POSITIVE)
    # 先按数量级拦截, 避免换算时触发 decimal 溢出
    if amount.adjusted() >= _MAX_AMOUNT_MAGNITUDE:
        raise ValueError(ErrorMessages.AMOUNT_TOO_LARGE)
    # 换算后不足 1 分的金额同样视为非正数
    minor_units = to_minor_units(amount)
    if minor_units <= 0:
        raise ValueError(ErrorMessages.AMOUNT_NOT_POSITIVE)
    if minor_units > MAX_AMOUNT_MINOR_UNITS:
        raise ValueError(ErrorMessages.AMOUNT_TOO_LARGE)
    return amount


def _validate_status(value: Any) -> str:
    if not InvoiceStatus.is_valid(value):
        raise ValueError(ErrorMessages.STATUS_REQUIRED)
    return str(value)


def to_minor_units(amount: Decimal) -> int:
    """将主货币单位金额换算为整数分.

    Args:
        amount: 已通过校验的正数金额.

    Returns:
        int: ``amount * 100`` 按四舍五入(half-up)取整后的结果.

    Example:
        >>> to_minor_units(Decimal("10.50"))
        1050
        >>> to_minor_units(Decimal("0.005"))
        1

    """
    return int((amount * _MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))


class InvoiceFormPayload(PayloadSchema):
    """创建/更新发票的表单 payload.

    三个字段全部必填. 缺失字段以 None 进入校验, 从而得到与非法取值一致的错误文案.
    """

    customer_id: str = Field(default=None, alias="customerId", validate_default=True)
    amount: Decimal = Field(default=None, validate_default=True)
    status: str = Field(default=None, validate_default=True)

    @field_validator("customer_id", mode="before")
    @classmethod
    def _validate_customer_id(cls, value: Any) -> str:
        return _validate_customer_id(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _validate_amount(cls, value: Any) -> Decimal:
        return _parse_amount(value)

    @field_validator("status", mode="before")
    @classmethod
    def _validate_status(cls, value: Any) -> str:
        return _validate_status(value)

    @property
    def amount_in_cents(self) -> int:
        """金额(分)."""
        return to_minor_units(self.amount)


__all__ = ["INVOICE_FORM_FIELDS", "MAX_AMOUNT_MINOR_UNITS", "InvoiceFormPayload", "to_minor_units"]
