"""
Centralized Validation Module

This module provides domain-specific validation schemas and rules.
Server is authoritative; forms mirror constraints for UX.

Domains:
- Invoice: invoice creation and updates
- Customer: customer creation
"""

from .schemas import (
    InvoiceSchema,
    CreateInvoiceSchema,
    UpdateInvoiceSchema,
    CustomerSchema,
    CreateCustomerSchema,
    SchemaResult,
)
from .errors import (
    APIError,
    DisabledOperationError,
    ErrorCode,
    ErrorResponse,
    flatten_field_errors,
)

__all__ = [
    "InvoiceSchema",
    "CreateInvoiceSchema",
    "UpdateInvoiceSchema",
    "CustomerSchema",
    "CreateCustomerSchema",
    "SchemaResult",
    "APIError",
    "DisabledOperationError",
    "ErrorCode",
    "ErrorResponse",
    "flatten_field_errors",
]
