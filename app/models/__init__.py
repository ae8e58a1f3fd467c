"""数据模型模块.

主要模型:
- Invoice: 发票模型
- Customer: 客户模型
"""

from importlib import import_module

__all__ = [
    "Customer",
    "Invoice",
]

_MODULE_MAP = {
    "Customer": "app.models.customer",
    "Invoice": "app.models.invoice",
}


def __getattr__(name: str) -> object:
    """延迟加载模型, 避免初始化周期引发的循环导入."""
    if name not in _MODULE_MAP:
        msg = f"module 'app.models' has no attribute {name}"
        raise AttributeError(msg)

    value = getattr(import_module(_MODULE_MAP[name]), name)
    globals()[name] = value
    return value
