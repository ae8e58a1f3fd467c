"""发票 Repository.

职责:
- 负责 Query 组装与数据库读取(read)
- 负责单条参数化 INSERT/UPDATE/DELETE 语句的执行(write)
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from datetime import date
from typing import cast

from sqlalchemy import delete, insert, select, update

from app import db
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.types.invoices import InvoiceListItem
from app.utils.time_utils import time_utils

DEFAULT_LIST_LIMIT = 50


class InvoicesRepository:
    """发票读写 Repository."""

    @staticmethod
    def insert_invoice(*, customer_id: str, amount: int, status: str, invoice_date: date) -> str:
        """插入一条发票记录.

        id 不由调用方提供, 由数据库列默认值生成并通过 RETURNING 取回.

        Returns:
            新发票的 id.

        """
        table = Invoice.__table__
        stmt = insert(table).values(
            customer_id=customer_id,
            amount=amount,
            status=status,
            date=invoice_date,
        ).returning(table.c.id)
        return cast(str, db.session.execute(stmt).scalar_one())

    @staticmethod
    def update_invoice(invoice_id: str, *, customer_id: str, amount: int, status: str) -> int:
        """更新发票的客户、金额与状态, 开票日期保持不变.

        Returns:
            匹配到的行数, id 不存在时为 0.

        """
        table = Invoice.__table__
        stmt = (
            update(table)
            .where(table.c.id == invoice_id)
            .values(customer_id=customer_id, amount=amount, status=status)
        )
        result = db.session.execute(stmt)
        return int(result.rowcount or 0)

    @staticmethod
    def delete_invoice(invoice_id: str) -> int:
        table = Invoice.__table__
        result = db.session.execute(delete(table).where(table.c.id == invoice_id))
        return int(result.rowcount or 0)

    @staticmethod
    def get_by_id(invoice_id: str) -> Invoice | None:
        return db.session.get(Invoice, invoice_id)

    @staticmethod
    def list_latest_invoices(limit: int = DEFAULT_LIST_LIMIT) -> list[InvoiceListItem]:
        """按开票日期倒序返回最近的发票.

        客户记录缺失时客户字段为空字符串.
        """
        stmt = (
            select(
                Invoice.id,
                Invoice.amount,
                Invoice.status,
                Invoice.date,
                Customer.name,
                Customer.email,
            )
            .outerjoin(Customer, Customer.id == Invoice.customer_id)
            .order_by(Invoice.date.desc(), Invoice.id)
            .limit(limit)
        )
        rows = db.session.execute(stmt).all()
        return [
            {
                "id": row.id,
                "customer_name": row.name or "",
                "customer_email": row.email or "",
                "amount": int(row.amount),
                "status": row.status,
                "date": time_utils.format_date(row.date),
            }
            for row in rows
        ]
