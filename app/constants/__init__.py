"""常量模块。

集中管理所有系统常量，包括状态、错误消息、HTTP 相关常量等。

主要常量：
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
- InvoiceStatus: 发票状态常量
- DashboardPaths: 看板视图路径常量
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
)

# 导入发票状态常量
from .invoice_status import InvoiceStatus

# 导入看板路径常量
from .dashboard_paths import DashboardPaths

# 导入Flash类别常量
from .flash_categories import FlashCategory

__all__ = [
    "DashboardPaths",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FlashCategory",
    "HttpStatus",
    "InvoiceStatus",
]
