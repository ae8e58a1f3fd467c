# tests/unit/routes/conftest.py
"""路由测试专用 fixtures.

提供 test_client 与预置客户数据.
"""

from datetime import date

import pytest

from app import db
from app.models.customer import Customer
from app.models.invoice import Invoice

SEEDED_INVOICE_ID = "3958dc9e-712f-4377-85e9-fec4b6a6442a"


@pytest.fixture(scope="function")
def client(app):
    """创建测试客户端."""
    return app.test_client()


@pytest.fixture(scope="function")
def seeded_invoice_id(app) -> str:
    """预置两位客户与一张发票."""
    with app.app_context():
        db.session.add_all(
            [
                Customer(id="c1", name="Delba de Oliveira", email="delba@example.com"),
                Customer(id="c2", name="Lee Robinson", email="lee@example.com"),
                Invoice(
                    id=SEEDED_INVOICE_ID,
                    customer_id="c1",
                    amount=15795,
                    status="pending",
                    date=date(2023, 12, 6),
                ),
            ],
        )
        db.session.commit()
    return SEEDED_INVOICE_ID
