import pytest

from app.services.invoices import InvoiceFormState


@pytest.mark.unit
def test_initial_state_renders_empty_mapping() -> None:
    state = InvoiceFormState.initial()

    assert state.has_errors is False
    assert state.to_dict() == {}


@pytest.mark.unit
def test_state_with_errors_renders_errors_and_message() -> None:
    state = InvoiceFormState(errors={"amount": ["bad amount"]}, message="failed")

    assert state.has_errors is True
    assert state.field_errors("amount") == ["bad amount"]
    assert state.field_errors("status") == []
    assert state.to_dict() == {"errors": {"amount": ["bad amount"]}, "message": "failed"}
