"""
Business Logic Services Layer

Form mutations for invoices and customers. Views stay thin; every write
goes through these services and comes back as an Outcome.
"""

from .collaborators import DjangoViewCache, Navigator, SqlPersistence
from .customer_service import CustomerService
from .invoice_service import InvoiceService
from .outcomes import FormState, Outcome, PersistFailed, Redirect, ValidationFailed

__all__ = [
    "CustomerService",
    "InvoiceService",
    "DjangoViewCache",
    "Navigator",
    "SqlPersistence",
    "FormState",
    "Outcome",
    "PersistFailed",
    "Redirect",
    "ValidationFailed",
]
