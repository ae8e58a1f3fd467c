"""发票看板 - 统一响应工具.

提供统一的错误响应结构,避免在全局错误处理器中散落 JSON 拼装逻辑.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Response, jsonify

from app.constants import HttpStatus
from app.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity
from app.errors import AppError, map_exception_to_status
from app.utils.time_utils import time_utils

if TYPE_CHECKING:
    from collections.abc import Mapping


def unified_error_response(
    error: BaseException,
    *,
    status_code: int | None = None,
    extra: Mapping[str, object] | None = None,
) -> tuple[dict[str, object], int]:
    """生成统一的错误响应载荷.

    非 AppError 的异常不会把内部细节暴露给客户端,统一使用通用错误文案.

    Args:
        error: 异常对象.
        status_code: HTTP 状态码,可选,默认根据异常类型自动映射.
        extra: 额外的错误信息,可选.

    Returns:
        包含两个元素的元组:
        - 错误响应载荷字典
        - HTTP 状态码

    """
    safe_error = error if isinstance(error, Exception) else Exception(str(error))
    final_status = int(status_code or map_exception_to_status(safe_error, default=HttpStatus.INTERNAL_SERVER_ERROR))

    if isinstance(safe_error, AppError):
        message = safe_error.message
        message_code = safe_error.message_key
        category = safe_error.category
        severity = safe_error.severity
    else:
        message = ErrorMessages.INTERNAL_ERROR
        message_code = "INTERNAL_ERROR"
        category = ErrorCategory.SYSTEM
        severity = ErrorSeverity.HIGH

    payload: dict[str, object] = {
        "success": False,
        "error": True,
        "message": message,
        "message_code": message_code,
        "category": category.value,
        "severity": severity.value,
        "timestamp": time_utils.now().isoformat(),
    }
    if extra:
        payload["extra"] = dict(extra)
    return payload, final_status


def jsonify_unified_error(
    error: BaseException,
    *,
    status_code: int | None = None,
    extra: Mapping[str, object] | None = None,
) -> tuple[Response, int]:
    """返回 Flask Response 对象的错误响应便捷函数."""
    payload, status = unified_error_response(error, status_code=status_code, extra=extra)
    return jsonify(payload), status
