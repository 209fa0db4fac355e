"""
Domain-Specific Validation Schemas

Centralized validation rules per domain object.
Server is authoritative; the forms only mirror constraints for UX.

Each schema provides:
- Field constraints (required, coercion, range, format, choices)
- A validate method returning either the cleaned data or the field
  messages grouped per form field
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Callable, Dict, List, Mapping, Optional

from .errors import ErrorCode, FieldError, flatten_field_errors

# invoices.amount is a 32-bit INTEGER of cents.
MAX_AMOUNT = Decimal("21474836.48")

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def to_decimal(value: Any) -> Decimal:
    """Coerce a submitted value to a number; blank and missing become zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip()
        number = Decimal(text) if text else Decimal("0")
    if not number.is_finite():
        raise InvalidOperation(value)
    return number


@dataclass
class FieldConstraints:
    required: bool = True
    required_message: Optional[str] = None
    coerce: Optional[Callable[[Any], Any]] = None
    coerce_message: Optional[str] = None
    greater_than: Optional[Decimal] = None
    greater_than_message: Optional[str] = None
    less_than: Optional[Decimal] = None
    less_than_message: Optional[str] = None
    # Rounds to this many decimal places before the range checks; needs less_than.
    places: Optional[int] = None
    pattern: Optional[str] = None
    pattern_message: Optional[str] = None
    choices: Optional[List[str]] = None
    choices_message: Optional[str] = None
    target: Optional[str] = None


@dataclass
class SchemaResult:
    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)


class BaseSchema:
    FIELDS: Dict[str, FieldConstraints] = {}

    @classmethod
    def validate(cls, data: Mapping[str, Any]) -> SchemaResult:
        errors: List[FieldError] = []
        cleaned: Dict[str, Any] = {}

        for field_name, constraints in cls.FIELDS.items():
            value, field_errors = cls._validate_field(field_name, data.get(field_name), constraints)
            if field_errors:
                errors.extend(field_errors)
            else:
                cleaned[constraints.target or field_name] = value

        if errors:
            return SchemaResult(success=False, errors=flatten_field_errors(errors))
        return SchemaResult(success=True, data=cleaned)

    @classmethod
    def omit(cls, *field_names: str, name: Optional[str] = None) -> type:
        """Derive a schema without the named fields, e.g. server-assigned ones."""
        fields = {k: v for k, v in cls.FIELDS.items() if k not in field_names}
        return type(name or f"{cls.__name__}Partial", (cls,), {"FIELDS": fields})

    @classmethod
    def _validate_field(
        cls,
        field_name: str,
        value: Any,
        constraints: FieldConstraints,
    ) -> tuple:
        if constraints.coerce is not None:
            try:
                value = constraints.coerce(value)
            except (InvalidOperation, ValueError, TypeError):
                return value, [FieldError(
                    field=field_name,
                    code=ErrorCode.FIELD_INVALID_TYPE.value,
                    message=constraints.coerce_message or f"{cls._humanize(field_name)} is invalid.",
                )]
        elif value is None or value == "":
            if not constraints.required:
                return value, []
            return value, [FieldError(
                field=field_name,
                code=ErrorCode.FIELD_REQUIRED.value,
                message=constraints.required_message or f"{cls._humanize(field_name)} is required.",
            )]

        errors = []

        if constraints.choices is not None and value not in constraints.choices:
            template = constraints.choices_message or "{field} must be one of: {choices}."
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_INVALID.value,
                message=template.format(
                    field=cls._humanize(field_name),
                    choices=", ".join(constraints.choices),
                    value=value,
                ),
            ))

        if constraints.pattern and not re.fullmatch(constraints.pattern, str(value)):
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_INVALID_FORMAT.value,
                message=constraints.pattern_message or f"{cls._humanize(field_name)} format is invalid.",
            ))

        if constraints.less_than is not None:
            if constraints.places is not None and abs(value) < constraints.less_than:
                value = value.quantize(Decimal(1).scaleb(-constraints.places), rounding=ROUND_HALF_UP)
            if not value < constraints.less_than:
                errors.append(FieldError(
                    field=field_name,
                    code=ErrorCode.FIELD_OUT_OF_RANGE.value,
                    message=constraints.less_than_message
                    or f"{cls._humanize(field_name)} must be less than {constraints.less_than}.",
                ))
                return value, errors

        if constraints.greater_than is not None and not value > constraints.greater_than:
            errors.append(FieldError(
                field=field_name,
                code=ErrorCode.FIELD_OUT_OF_RANGE.value,
                message=constraints.greater_than_message
                or f"{cls._humanize(field_name)} must be greater than {constraints.greater_than}.",
            ))

        return value, errors

    @staticmethod
    def _humanize(field_name: str) -> str:
        return field_name.replace("_", " ").title()


class InvoiceSchema(BaseSchema):
    STATUS_CHOICES = ["pending", "paid"]

    FIELDS = {
        "id": FieldConstraints(required=True),
        "customerId": FieldConstraints(
            required=True,
            required_message="Please select a customer.",
            target="customer_id",
        ),
        "amount": FieldConstraints(
            coerce=to_decimal,
            coerce_message="Expected number, received nan",
            greater_than=Decimal("0"),
            greater_than_message="Please enter an amount greater than $0.",
            less_than=MAX_AMOUNT,
            less_than_message="Please enter an amount less than $21,474,836.48.",
            places=2,
        ),
        "status": FieldConstraints(
            required=True,
            required_message="Please select an invoice status.",
            choices=STATUS_CHOICES,
            choices_message="Invalid enum value. Expected 'pending' | 'paid', received '{value}'",
        ),
        "date": FieldConstraints(required=True),
    }


# id and date are never user input: the database assigns one, the mutator the other.
CreateInvoiceSchema = InvoiceSchema.omit("id", "date", name="CreateInvoiceSchema")
UpdateInvoiceSchema = InvoiceSchema.omit("id", "date", name="UpdateInvoiceSchema")


class CustomerSchema(BaseSchema):
    FIELDS = {
        "id": FieldConstraints(required=True),
        "name": FieldConstraints(
            required=True,
            required_message="Please enter a client name.",
        ),
        # Message text shared with name, as shipped on the customer form.
        "email": FieldConstraints(
            required=True,
            required_message="Please enter a client name.",
            pattern=EMAIL_PATTERN,
            pattern_message="Please enter a client name.",
        ),
        "address": FieldConstraints(
            required=True,
            required_message="Please select an address.",
        ),
    }


CreateCustomerSchema = CustomerSchema.omit("id", name="CreateCustomerSchema")
