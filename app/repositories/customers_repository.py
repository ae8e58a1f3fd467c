"""客户 Repository.

职责:
- 仅负责 Query 组装与数据库读取
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from sqlalchemy import select

from app import db
from app.models.customer import Customer
from app.types.invoices import CustomerOption


class CustomersRepository:
    """客户读模型 Repository."""

    @staticmethod
    def list_customer_options() -> list[CustomerOption]:
        rows = db.session.execute(select(Customer.id, Customer.name).order_by(Customer.name.asc())).all()
        return [{"id": row.id, "name": row.name} for row in rows]
