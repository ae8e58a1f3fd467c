"""基于 Flask 的浏览器跳转实现."""

from __future__ import annotations

from typing import NoReturn

from flask import abort, redirect

from app.constants import HttpStatus


class FlaskNavigator:
    """通过中断当前请求实现跳转.

    ``redirect`` 抛出携带 303 响应的 HTTPException,调用方之后的代码不会执行.
    POST 提交后使用 303 让浏览器以 GET 打开目标页.
    """

    def redirect(self, path: str) -> NoReturn:
        """跳转到指定路径.

        Args:
            path: 目标逻辑路径,例如 ``/dashboard/invoices``.

        Raises:
            werkzeug.exceptions.HTTPException: 总是抛出,携带跳转响应.

        """
        abort(redirect(path, code=HttpStatus.SEE_OTHER))


__all__ = ["FlaskNavigator"]
