import logging
import re
from typing import Any

from models.customer import Customer
from utils.errors import EmailAlreadyPresent, InvalidEmail

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}")

# patch key -> (customer attribute, accepted type)
PREFERENCE_FIELDS = {
    "notifications": ("notifications", bool),
    "preferredStore": ("preferred_store", str),
    "email": ("email", str),
}


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and bool(value) and EMAIL_PATTERN.fullmatch(value) is not None


def update_preferences(customer: Customer, patch: Any) -> Customer:
    """
    Overwrite the contact/preference fields present in the patch.
    Missing or wrongly typed values are ignored. Email format is not checked here.
    """
    if not isinstance(patch, dict):
        patch = {}

    changed = []
    for key, (attr, expected) in PREFERENCE_FIELDS.items():
        value = patch.get(key)
        if isinstance(value, expected):
            setattr(customer, attr, value)
            changed.append(key)

    if changed:
        logger.info(f"Updated preferences for customer {customer.id}: {', '.join(changed)}")
    return customer


def backfill_email(customer: Customer, new_email: Any) -> Customer:
    """
    One-time email assignment for legacy customers that were created without one.
    """
    if customer.email:
        raise EmailAlreadyPresent()
    if not is_valid_email(new_email):
        raise InvalidEmail()

    customer.email = new_email
    logger.info(f"Backfilled email for legacy customer {customer.id}")
    return customer
