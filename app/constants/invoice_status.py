"""发票状态常量.

状态集合是封闭的,任何其他取值都不允许落库.
"""

from typing import ClassVar


class InvoiceStatus:
    """发票状态常量."""

    PENDING = "pending"  # 待付款
    PAID = "paid"  # 已付款

    ALL: ClassVar[tuple[str, ...]] = (PENDING, PAID)

    LABELS: ClassVar[dict[str, str]] = {
        PENDING: "Pending",
        PAID: "Paid",
    }

    @classmethod
    def is_valid(cls, status: object) -> bool:
        """判断状态值是否合法.

        Args:
            status: 待检查的状态值.

        Returns:
            bool: 仅当取值为 pending/paid 之一时返回 True.

        """
        return isinstance(status, str) and status in cls.ALL

