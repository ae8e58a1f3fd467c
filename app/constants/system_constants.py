"""发票看板 - 常量定义模块

统一管理错误分类、严重度与提示文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    BUSINESS = "business"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    HIGH = "high"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    RESOURCE_NOT_FOUND = "资源不存在"

    # 业务错误
    INVOICE_NOT_FOUND = "发票不存在"

    # 发票表单(面向终端用户,保持英文原文)
    CUSTOMER_REQUIRED = "Please select a customer."
    AMOUNT_NOT_POSITIVE = "Please enter an amount greater than $0."
    AMOUNT_TOO_LARGE = "Please enter a smaller amount."
    STATUS_REQUIRED = "Please select an invoice status."
    CREATE_INVOICE_MISSING_FIELDS = "Missing Fields. Failed to Create Invoice."
    UPDATE_INVOICE_MISSING_FIELDS = "Missing fields. Failed to update invoice"
    CREATE_INVOICE_DATABASE_ERROR = "Database error: Failed to create invoice"
    UPDATE_INVOICE_DATABASE_ERROR = "Database error, unable to update invoice"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
]
