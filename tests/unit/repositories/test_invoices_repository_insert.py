import uuid
from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from app import db
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.repositories.invoices_repository import InvoicesRepository


@pytest.mark.unit
def test_insert_invoice_leaves_id_to_database_default(app_context) -> None:
    db.session.add(Customer(id="c1", name="Delba de Oliveira", email="delba@example.com"))
    db.session.commit()

    statements: list[str] = []

    def _record(_conn, _cursor, statement, _parameters, _context, _executemany) -> None:
        statements.append(statement)

    event.listen(db.engine, "before_cursor_execute", _record)
    try:
        invoice_id = InvoicesRepository.insert_invoice(
            customer_id="c1",
            amount=1050,
            status="pending",
            invoice_date=date(2024, 5, 1),
        )
        db.session.commit()
    finally:
        event.remove(db.engine, "before_cursor_execute", _record)

    insert_sql = next(statement for statement in statements if statement.lstrip().upper().startswith("INSERT"))
    column_list = insert_sql.split("(", 1)[1].split(")", 1)[0]
    assert [column.strip().strip('"') for column in column_list.split(",")] == ["customer_id", "amount", "status", "date"]
    assert "RETURNING" in insert_sql.upper()
    assert uuid.UUID(invoice_id).version == 4
    stored = db.session.get(Invoice, invoice_id)
    assert stored is not None
    assert stored.amount == 1050


@pytest.mark.unit
def test_invoice_id_default_uses_gen_random_uuid_on_postgresql() -> None:
    ddl = str(CreateTable(Invoice.__table__).compile(dialect=postgresql.dialect()))

    assert "DEFAULT gen_random_uuid()::text" in ddl
