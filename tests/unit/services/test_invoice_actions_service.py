from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from app import db
from app.constants import DashboardPaths, ErrorMessages
from app.models.customer import Customer
from app.models.invoice import Invoice
from app.repositories.invoices_repository import InvoicesRepository
from app.services.invoices import InvoiceActionsService, InvoiceFormState
from app.utils.time_utils import TimeUtils

FIXED_TODAY = date(2024, 5, 1)


class _RecordingInvoicesRepository(InvoicesRepository):
    def __init__(self) -> None:
        self.inserted: list[dict[str, object]] = []
        self.updated: list[tuple[str, dict[str, object]]] = []

    def insert_invoice(self, **kwargs: object) -> str:  # type: ignore[override]
        self.inserted.append(kwargs)
        return "recorded-id"

    def update_invoice(self, invoice_id: str, **kwargs: object) -> int:  # type: ignore[override]
        self.updated.append((invoice_id, kwargs))
        return 1


class _FailingInvoicesRepository(InvoicesRepository):
    @staticmethod
    def _boom() -> OperationalError:
        return OperationalError("statement", {}, Exception("connection refused"))

    def insert_invoice(self, **kwargs: object) -> str:  # type: ignore[override]
        raise self._boom()

    def update_invoice(self, invoice_id: str, **kwargs: object) -> int:  # type: ignore[override]
        raise self._boom()

    def delete_invoice(self, invoice_id: str) -> int:  # type: ignore[override]
        raise self._boom()


def _build_service(repository=None, *, cache_invalidator, navigator) -> InvoiceActionsService:
    return InvoiceActionsService(
        repository,
        cache_invalidator=cache_invalidator,
        navigator=navigator,
        today=lambda: FIXED_TODAY,
    )


def _seed_customers() -> None:
    db.session.add_all(
        [
            Customer(id="c1", name="Delba de Oliveira", email="delba@example.com"),
            Customer(id="c2", name="Lee Robinson", email="lee@example.com"),
        ],
    )
    db.session.commit()


def _seed_invoice(**overrides: object) -> Invoice:
    values: dict[str, object] = {
        "id": "0b5b5f5e-8c1e-4c55-9a0e-000000000001",
        "customer_id": "c1",
        "amount": 100,
        "status": "pending",
        "date": date(2023, 1, 1),
    }
    values.update(overrides)
    invoice = Invoice(**values)
    db.session.add(invoice)
    db.session.commit()
    return invoice


@pytest.mark.unit
def test_create_invoice_persists_minor_units_and_redirects(
    app_context,
    cache_invalidator,
    navigator,
    navigation_requested,
) -> None:
    _seed_customers()
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    with pytest.raises(navigation_requested):
        service.create_invoice(None, {"customerId": "c1", "amount": "10.50", "status": "pending"})

    invoices = Invoice.query.all()
    assert len(invoices) == 1
    created = invoices[0]
    assert created.amount == 1050
    assert created.status == "pending"
    assert created.customer_id == "c1"
    assert created.date == FIXED_TODAY
    assert isinstance(created.id, str)
    assert len(created.id) == 36
    assert cache_invalidator.paths == [DashboardPaths.INVOICES]
    assert navigator.paths == [DashboardPaths.INVOICES]


@pytest.mark.unit
def test_create_invoice_generates_distinct_ids(app_context, cache_invalidator, navigator, navigation_requested) -> None:
    _seed_customers()
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    for amount in ("1", "2"):
        with pytest.raises(navigation_requested):
            service.create_invoice(None, {"customerId": "c1", "amount": amount, "status": "paid"})

    ids = {invoice.id for invoice in Invoice.query.all()}
    assert len(ids) == 2


@pytest.mark.unit
def test_create_invoice_defaults_to_utc_today(
    app_context,
    monkeypatch,
    cache_invalidator,
    navigator,
    navigation_requested,
) -> None:
    monkeypatch.setattr(TimeUtils, "today", staticmethod(lambda: date(2030, 12, 31)))
    service = InvoiceActionsService(cache_invalidator=cache_invalidator, navigator=navigator)

    with pytest.raises(navigation_requested):
        service.create_invoice(None, {"customerId": "c1", "amount": "3", "status": "paid"})

    assert Invoice.query.one().date == date(2030, 12, 31)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("form_data", "expected_errors"),
    [
        (
            {"customerId": "c1", "amount": "0", "status": "pending"},
            {"amount": [ErrorMessages.AMOUNT_NOT_POSITIVE]},
        ),
        (
            {"customerId": "c1", "amount": "-3", "status": "pending"},
            {"amount": [ErrorMessages.AMOUNT_NOT_POSITIVE]},
        ),
        (
            {"customerId": "c1", "amount": "5", "status": "draft"},
            {"status": [ErrorMessages.STATUS_REQUIRED]},
        ),
        (
            {"amount": "5", "status": "paid"},
            {"customerId": [ErrorMessages.CUSTOMER_REQUIRED]},
        ),
    ],
)
def test_create_invoice_returns_field_errors_without_side_effects(
    app_context,
    cache_invalidator,
    navigator,
    form_data,
    expected_errors,
) -> None:
    repository = _RecordingInvoicesRepository()
    service = _build_service(repository, cache_invalidator=cache_invalidator, navigator=navigator)

    state = service.create_invoice(InvoiceFormState.initial(), form_data)

    assert state.errors == expected_errors
    assert state.message == ErrorMessages.CREATE_INVOICE_MISSING_FIELDS
    assert repository.inserted == []
    assert cache_invalidator.paths == []
    assert navigator.paths == []


@pytest.mark.unit
@pytest.mark.parametrize(
    ("amount", "expected_cents"),
    [("10.50", 1050), ("0.01", 1), ("19.999", 2000), ("7", 700), ("0.005", 1)],
)
def test_create_invoice_rounds_amount_to_minor_units(
    app_context,
    cache_invalidator,
    navigator,
    navigation_requested,
    amount,
    expected_cents,
) -> None:
    repository = _RecordingInvoicesRepository()
    service = _build_service(repository, cache_invalidator=cache_invalidator, navigator=navigator)

    with pytest.raises(navigation_requested):
        service.create_invoice(None, {"customerId": "c1", "amount": amount, "status": "paid"})

    assert repository.inserted == [
        {"customer_id": "c1", "amount": expected_cents, "status": "paid", "invoice_date": FIXED_TODAY},
    ]


@pytest.mark.unit
def test_create_invoice_reports_database_error_without_invalidating(app_context, cache_invalidator, navigator) -> None:
    service = _build_service(_FailingInvoicesRepository(), cache_invalidator=cache_invalidator, navigator=navigator)

    state = service.create_invoice(None, {"customerId": "c1", "amount": "10", "status": "paid"})

    assert state == InvoiceFormState(message=ErrorMessages.CREATE_INVOICE_DATABASE_ERROR)
    assert state.to_dict() == {"message": ErrorMessages.CREATE_INVOICE_DATABASE_ERROR}
    assert cache_invalidator.paths == []
    assert navigator.paths == []
    # 回滚后会话仍可继续使用
    assert Invoice.query.count() == 0


@pytest.mark.unit
def test_update_invoice_changes_fields_but_keeps_id_and_date(
    app_context,
    cache_invalidator,
    navigator,
    navigation_requested,
) -> None:
    _seed_customers()
    invoice_id = _seed_invoice().id
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    with pytest.raises(navigation_requested):
        service.update_invoice(invoice_id, None, {"customerId": "c2", "amount": "5", "status": "paid"})

    updated = db.session.get(Invoice, invoice_id)
    assert updated is not None
    assert updated.customer_id == "c2"
    assert updated.amount == 500
    assert updated.status == "paid"
    assert updated.date == date(2023, 1, 1)
    assert cache_invalidator.paths == [DashboardPaths.INVOICES]
    assert navigator.paths == [DashboardPaths.INVOICES]


@pytest.mark.unit
def test_update_missing_invoice_is_not_an_error(app_context, cache_invalidator, navigator, navigation_requested) -> None:
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    with pytest.raises(navigation_requested):
        service.update_invoice("does-not-exist", None, {"customerId": "c1", "amount": "5", "status": "paid"})

    assert Invoice.query.count() == 0
    assert cache_invalidator.paths == [DashboardPaths.INVOICES]
    assert navigator.paths == [DashboardPaths.INVOICES]


@pytest.mark.unit
def test_update_invoice_returns_field_errors(app_context, cache_invalidator, navigator) -> None:
    repository = _RecordingInvoicesRepository()
    service = _build_service(repository, cache_invalidator=cache_invalidator, navigator=navigator)

    state = service.update_invoice("any-id", None, {"customerId": "c1", "amount": "abc", "status": "paid"})

    assert state.errors == {"amount": [ErrorMessages.AMOUNT_NOT_POSITIVE]}
    assert state.message == ErrorMessages.UPDATE_INVOICE_MISSING_FIELDS
    assert repository.updated == []
    assert navigator.paths == []


@pytest.mark.unit
def test_update_invoice_reports_database_error(app_context, cache_invalidator, navigator) -> None:
    service = _build_service(_FailingInvoicesRepository(), cache_invalidator=cache_invalidator, navigator=navigator)

    state = service.update_invoice("any-id", None, {"customerId": "c1", "amount": "5", "status": "paid"})

    assert state.message == ErrorMessages.UPDATE_INVOICE_DATABASE_ERROR
    assert state.errors == {}
    assert cache_invalidator.paths == []
    assert navigator.paths == []


@pytest.mark.unit
def test_delete_invoice_removes_row_and_invalidates(app_context, cache_invalidator, navigator) -> None:
    invoice_id = _seed_invoice().id
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    assert service.delete_invoice(invoice_id) is None

    assert db.session.get(Invoice, invoice_id) is None
    assert cache_invalidator.paths == [DashboardPaths.INVOICES]
    assert navigator.paths == []


@pytest.mark.unit
def test_delete_invoice_twice_is_idempotent(app_context, cache_invalidator, navigator) -> None:
    invoice_id = _seed_invoice().id
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    service.delete_invoice(invoice_id)
    service.delete_invoice(invoice_id)

    assert Invoice.query.count() == 0
    assert cache_invalidator.paths == [DashboardPaths.INVOICES, DashboardPaths.INVOICES]


@pytest.mark.unit
def test_delete_invoice_swallows_database_error_and_still_invalidates(
    app_context,
    cache_invalidator,
    navigator,
) -> None:
    service = _build_service(_FailingInvoicesRepository(), cache_invalidator=cache_invalidator, navigator=navigator)

    assert service.delete_invoice("any-id") is None

    assert cache_invalidator.paths == [DashboardPaths.INVOICES]
    assert navigator.paths == []


@pytest.mark.unit
def test_create_invoice_rejects_amount_beyond_integer_column(app_context, cache_invalidator, navigator) -> None:
    _seed_customers()
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    state = service.create_invoice(None, {"customerId": "c1", "amount": "100000000000000000", "status": "paid"})

    assert state.errors == {"amount": [ErrorMessages.AMOUNT_TOO_LARGE]}
    assert state.message == ErrorMessages.CREATE_INVOICE_MISSING_FIELDS
    assert Invoice.query.count() == 0
    assert cache_invalidator.paths == []
    assert navigator.paths == []


@pytest.mark.unit
def test_update_invoice_rejects_amount_beyond_integer_column(app_context, cache_invalidator, navigator) -> None:
    _seed_customers()
    invoice_id = _seed_invoice().id
    service = _build_service(cache_invalidator=cache_invalidator, navigator=navigator)

    state = service.update_invoice(invoice_id, None, {"customerId": "c1", "amount": "21474836.48", "status": "paid"})

    assert state.errors == {"amount": [ErrorMessages.AMOUNT_TOO_LARGE]}
    assert state.message == ErrorMessages.UPDATE_INVOICE_MISSING_FIELDS
    assert db.session.get(Invoice, invoice_id).amount == 100
    assert navigator.paths == []
