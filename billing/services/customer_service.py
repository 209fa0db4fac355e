import logging
from typing import Any, Mapping, Optional

from django.conf import settings
from django.db import DatabaseError

from ..validation.errors import DisabledOperationError
from ..validation.schemas import CreateCustomerSchema
from .collaborators import DjangoViewCache, Navigator, SqlPersistence
from .outcomes import FormState, Outcome, PersistFailed, ValidationFailed

logger = logging.getLogger(__name__)


class CustomerService:
    LISTING_PATH = "/dashboard/customers"

    def __init__(self, persistence=None, view_cache=None, navigator=None, default_image_url: Optional[str] = None):
        self.persistence = persistence if persistence is not None else SqlPersistence()
        self.view_cache = view_cache if view_cache is not None else DjangoViewCache()
        self.navigator = navigator if navigator is not None else Navigator()
        self.default_image_url = default_image_url or settings.BILLING_DEFAULT_CUSTOMER_IMAGE

    def create_customer(self, prev_state: Optional[FormState], form_data: Mapping[str, Any]) -> Outcome:
        result = CreateCustomerSchema.validate(form_data)
        if not result.success:
            return ValidationFailed(
                errors=result.errors,
                message="Missing Fields. Failed to Create Client.",
            )

        name = result.data["name"]
        email = result.data["email"]
        address = result.data["address"]

        try:
            self.persistence.execute(
                "INSERT INTO customers (name, email, address, image_url) VALUES (%s, %s, %s, %s)",
                [name, email, address, self.default_image_url],
            )
        except DatabaseError:
            logger.exception(f"Failed to create customer {email}")
            # The placeholder is not interpolated; the forms show this exact text.
            return PersistFailed(message="Database Error: Failed to Create Client. SQL: ${error} ")

        logger.info(f"Created customer {email}")
        self.view_cache.invalidate(self.LISTING_PATH)
        return self.navigator.redirect(self.LISTING_PATH)

    def delete_customer(self, customer_id: str) -> Outcome:
        logger.warning(f"Rejected delete for customer {customer_id}: operation disabled")
        raise DisabledOperationError("Failed to Delete Invoice")
