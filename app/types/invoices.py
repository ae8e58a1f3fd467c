"""发票写操作相关的协议与类型别名.

写操作需要的两个外部协作者(视图缓存失效、浏览器跳转)以协议形式显式注入,
便于在测试中替换为记录调用的假实现.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import NoReturn, Protocol, TypeAlias, TypedDict

FormPayload: TypeAlias = Mapping[str, object]
FieldErrors: TypeAlias = dict[str, list[str]]


class CacheInvalidator(Protocol):
    """视图缓存失效协议."""

    def revalidate_path(self, path: str) -> None:
        """标记逻辑路径下的缓存视图为过期,下一次访问时重新计算."""
        ...


class Navigator(Protocol):
    """浏览器跳转协议.

    ``redirect`` 是终止操作: 调用后当前处理流程不会继续执行.
    """

    def redirect(self, path: str) -> NoReturn:
        """将浏览器跳转到指定逻辑路径."""
        ...


class InvoiceListItem(TypedDict):
    """列表页单行发票数据."""

    id: str
    customer_name: str
    customer_email: str
    amount: int
    status: str
    date: str


class CustomerOption(TypedDict):
    """表单中客户下拉选项."""

    id: str
    name: str


__all__ = [
    "CacheInvalidator",
    "CustomerOption",
    "FieldErrors",
    "FormPayload",
    "InvoiceListItem",
    "Navigator",
]
