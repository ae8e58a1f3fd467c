"""表单 payload 取参与规范化.

目标:
- 统一处理 Werkzeug MultiDict(form) 与普通 dict.
- 只按字段名取出所需值,缺失字段显式返回 None,不做任何业务校验.

注意:
- 字段值保持原样(仅清理 NUL 字符),空白字符串是否合法交由 schema 层(pydantic)判断.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, cast

_STRING_LIKE_TYPES = (str, bytes, bytearray)


def extract_form_fields(payload: object | None, fields: Sequence[str]) -> dict[str, object | None]:
    """从表单数据中提取指定字段.

    Args:
        payload: MultiDict 兼容对象或普通 mapping,允许为 None.
        fields: 需要提取的字段名,按顺序输出.

    Returns:
        仅包含 ``fields`` 中字段的 dict,缺失字段值为 None. 多值字段取最后一个值.

    Raises:
        TypeError: payload 既不是 mapping 也不是 MultiDict 兼容对象时抛出.

    Example:
        >>> extract_form_fields({"amount": "10"}, ["customerId", "amount"])
        {'customerId': None, 'amount': '10'}

    """
    if payload is None:
        return dict.fromkeys(fields)

    if hasattr(payload, "getlist"):
        multi_dict = cast(Any, payload)
        return {name: _last_value(list(multi_dict.getlist(name) or [])) for name in fields}

    if isinstance(payload, Mapping):
        return {name: _normalize_value(payload.get(name)) for name in fields}

    raise TypeError("payload 必须为 mapping 或 MultiDict 兼容对象")


def _normalize_value(value: object) -> object | None:
    if isinstance(value, Sequence) and not isinstance(value, _STRING_LIKE_TYPES):
        return _last_value(list(value))
    return _sanitize_scalar(value)


def _last_value(values: list[object]) -> object | None:
    if not values:
        return None
    return _sanitize_scalar(values[-1])


def _sanitize_scalar(value: object) -> object | None:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return value.decode(errors="ignore").replace("\x00", "")
    if isinstance(value, str):
        return value.replace("\x00", "")
    return value


__all__ = ["extract_form_fields"]
