"""共享类型定义."""

from typing import TypeAlias

from flask.typing import ResponseReturnValue

from app.types.invoices import (
    CacheInvalidator,
    CustomerOption,
    FieldErrors,
    FormPayload,
    InvoiceListItem,
    Navigator,
)

RouteReturn: TypeAlias = ResponseReturnValue

__all__ = [
    "CacheInvalidator",
    "CustomerOption",
    "FieldErrors",
    "FormPayload",
    "InvoiceListItem",
    "Navigator",
    "RouteReturn",
]
