"""Schema 校验与错误映射.

``validate_form`` 返回带标签的 ``FormValidationResult``, 收集全部字段错误, 用于表单回显.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.schemas.invoices import InvoiceFormPayload

ModelT = TypeVar("ModelT", bound=BaseModel)

_DEFAULT_ERROR_MESSAGE = "参数校验失败"


@dataclass(frozen=True, slots=True)
class FormValidationResult(Generic[ModelT]):
    """表单校验结果.

    成功时 ``data`` 为校验后的 payload, ``errors`` 为空;
    失败时 ``data`` 为 None, ``errors`` 仅包含未通过校验的字段.

    Attributes:
        success: 是否通过校验.
        data: 校验后的 payload.
        errors: 字段名(表单别名) -> 错误文案列表.

    """

    success: bool
    data: ModelT | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: ModelT) -> FormValidationResult[ModelT]:
        """创建成功结果."""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, errors: Mapping[str, list[str]]) -> FormValidationResult[ModelT]:
        """创建失败结果."""
        return cls(success=False, errors={name: list(messages) for name, messages in errors.items()})


def validate_form(model: type[ModelT], payload: object) -> FormValidationResult[ModelT]:
    """执行 schema 校验并收集全部字段错误.

    Args:
        model: pydantic model.
        payload: 待校验的 payload(通常来自 request payload adapter).

    Returns:
        FormValidationResult: 成功时携带 model 实例, 失败时携带字段错误.

    """
    try:
        return FormValidationResult.ok(model.model_validate(payload))
    except PydanticValidationError as exc:
        return FormValidationResult.fail(_collect_field_errors(model, exc))


def validate_invoice_form(candidate: object) -> FormValidationResult[InvoiceFormPayload]:
    """校验发票表单.

    Example:
        >>> result = validate_invoice_form({"customerId": "c1", "amount": "0", "status": "paid"})
        >>> result.errors
        {'amount': ['Please enter an amount greater than $0.']}

    """
    return validate_form(InvoiceFormPayload, candidate)


def _collect_field_errors(model: type[BaseModel], exc: PydanticValidationError) -> dict[str, list[str]]:
    collected: dict[str, list[str]] = {}
    for error in exc.errors():
        name = _resolve_field_name(model, error.get("loc"))
        message = _extract_message(error)
        messages = collected.setdefault(name, [])
        if message not in messages:
            messages.append(message)
    return collected


def _resolve_field_name(model: type[BaseModel], loc: Any) -> str:
    if not isinstance(loc, tuple) or not loc or not isinstance(loc[0], str):
        return "__root__"
    name = loc[0]
    field_info = model.model_fields.get(name)
    if field_info is not None and field_info.alias:
        return field_info.alias
    return name


def _extract_message(error: Mapping[str, Any]) -> str:
    ctx = error.get("ctx")
    if isinstance(ctx, dict) and "error" in ctx:
        raw_error = ctx.get("error")
        if isinstance(raw_error, BaseException):
            return str(raw_error)
        if isinstance(raw_error, str) and raw_error.strip():
            return raw_error

    msg = error.get("msg")
    if isinstance(msg, str) and msg.strip():
        return msg
    return _DEFAULT_ERROR_MESSAGE


__all__ = [
    "FormValidationResult",
    "validate_form",
    "validate_invoice_form",
]
