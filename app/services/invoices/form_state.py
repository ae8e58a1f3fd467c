"""发票表单的回显状态."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.types.invoices import FieldErrors


@dataclass(frozen=True, slots=True)
class InvoiceFormState:
    """创建/更新发票失败时返回给表单的状态.

    Attributes:
        errors: 字段名 -> 错误文案列表, 仅包含未通过校验的字段.
        message: 汇总提示文案.

    """

    errors: FieldErrors = field(default_factory=dict)
    message: str | None = None

    @classmethod
    def initial(cls) -> InvoiceFormState:
        """首次渲染表单时使用的空状态."""
        return cls()

    @property
    def has_errors(self) -> bool:
        return bool(self.errors) or self.message is not None

    def field_errors(self, name: str) -> list[str]:
        """返回指定字段的错误文案."""
        return list(self.errors.get(name, []))

    def to_dict(self) -> dict[str, object]:
        """转换为 ``{errors?, message?}`` 结构, 空值字段不输出."""
        payload: dict[str, object] = {}
        if self.errors:
            payload["errors"] = {name: list(messages) for name, messages in self.errors.items()}
        if self.message is not None:
            payload["message"] = self.message
        return payload
