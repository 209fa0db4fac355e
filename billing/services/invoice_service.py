import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Mapping, Optional

from django.db import DatabaseError
from django.utils import timezone

from ..validation.errors import DisabledOperationError
from ..validation.schemas import CreateInvoiceSchema, UpdateInvoiceSchema
from .collaborators import DjangoViewCache, Navigator, SqlPersistence
from .outcomes import FormState, Outcome, PersistFailed, ValidationFailed

logger = logging.getLogger(__name__)


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def today() -> date:
    return timezone.now().date()


class InvoiceService:
    LISTING_PATH = "/dashboard/invoices"

    def __init__(
        self,
        persistence=None,
        view_cache=None,
        navigator=None,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.persistence = persistence if persistence is not None else SqlPersistence()
        self.view_cache = view_cache if view_cache is not None else DjangoViewCache()
        self.navigator = navigator if navigator is not None else Navigator()
        self.clock = clock or today

    def create_invoice(self, prev_state: Optional[FormState], form_data: Mapping[str, Any]) -> Outcome:
        result = CreateInvoiceSchema.validate(form_data)
        if not result.success:
            return ValidationFailed(
                errors=result.errors,
                message="Missing Fields. Failed to Create Invoice.",
            )

        customer_id = result.data["customer_id"]
        amount_in_cents = to_minor_units(result.data["amount"])
        status = result.data["status"]
        invoice_date = self.clock().isoformat()

        try:
            self.persistence.execute(
                "INSERT INTO invoices (customer_id, amount, status, date) VALUES (%s, %s, %s, %s)",
                [customer_id, amount_in_cents, status, invoice_date],
            )
        except DatabaseError:
            logger.exception(f"Failed to create invoice for customer {customer_id}")
            return PersistFailed(message="Database Error: Failed to Create Invoice.")

        logger.info(f"Created invoice for customer {customer_id}: {amount_in_cents} cents, {status}")
        self.view_cache.invalidate(self.LISTING_PATH)
        return self.navigator.redirect(self.LISTING_PATH)

    def update_invoice(
        self,
        invoice_id: str,
        prev_state: Optional[FormState],
        form_data: Mapping[str, Any],
    ) -> Outcome:
        result = UpdateInvoiceSchema.validate(form_data)
        if not result.success:
            # Shares the create wording; the edit form has always shown it.
            return ValidationFailed(
                errors=result.errors,
                message="Missing Fields. Failed to Create Invoice.",
            )

        customer_id = result.data["customer_id"]
        amount_in_cents = to_minor_units(result.data["amount"])
        status = result.data["status"]

        try:
            self.persistence.execute(
                "UPDATE invoices SET customer_id = %s, amount = %s, status = %s WHERE id = %s",
                [customer_id, amount_in_cents, status, invoice_id],
            )
        except DatabaseError:
            logger.exception(f"Failed to update invoice {invoice_id}")
            return PersistFailed(message="Database Error: Failed to Update Invoice.")

        logger.info(f"Updated invoice {invoice_id}")
        self.view_cache.invalidate(self.LISTING_PATH)
        return self.navigator.redirect(self.LISTING_PATH)

    def delete_invoice(self, invoice_id: str) -> Outcome:
        """Deleting invoices is switched off; always raises before touching the database."""
        logger.warning(f"Rejected delete for invoice {invoice_id}: operation disabled")
        raise DisabledOperationError("Failed to Delete Invoice")
