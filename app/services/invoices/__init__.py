"""发票相关服务."""

from app.services.invoices.form_state import InvoiceFormState
from app.services.invoices.invoice_actions_service import InvoiceActionsService
from app.services.invoices.invoices_list_service import InvoicesListService

__all__ = ["InvoiceActionsService", "InvoiceFormState", "InvoicesListService"]
