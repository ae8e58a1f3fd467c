"""Schema 基础设施."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PayloadSchema(BaseModel):
    """写路径 payload 的基础 schema.

    约定:
    - 默认忽略未知字段, 以兼容表单中的扩展字段.
    - 允许同时按字段名与表单别名构造.
    - schema 负责业务校验与错误文案, request payload adapter 负责取参形状.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)
