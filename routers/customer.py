import logging
import re

from fastapi import APIRouter, Depends, Request

from db.init import CustomerStore, get_store
from utils.contact import backfill_email, update_preferences
from utils.errors import CustomerNotFound, LoyaltyError
from utils.loyalty import apply_purchase

logger = logging.getLogger(__name__)

router = APIRouter()

# leading ASCII integer, like "12" in "12abc"; anything else matches no customer
_ID_PREFIX = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


def parse_customer_id(raw: str) -> int:
    match = _ID_PREFIX.match(raw)
    if not match:
        raise CustomerNotFound()
    try:
        return int(match.group(1))
    except ValueError:
        # past the interpreter's int conversion limit, so no stored id can match
        raise CustomerNotFound()


async def json_body(request: Request) -> dict:
    """Request body as a dict; missing, malformed or non-object bodies count as {}."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.get("/{customer_id}")
def get_customer(customer_id: str, store: CustomerStore = Depends(get_store)):
    customer = store.find_by_id(parse_customer_id(customer_id))
    if not customer:
        raise CustomerNotFound()
    return customer.to_json()


@router.post("/{customer_id}/purchase")
def record_purchase(
    customer_id: str,
    data: dict = Depends(json_body),
    store: CustomerStore = Depends(get_store),
):
    """
    Record a purchase, award points (with high-value bonus) and recompute the tier.
    Body: {"amount": number, "storeLocation"?: string}
    """
    try:
        with store.update(parse_customer_id(customer_id)) as customer:
            result = apply_purchase(customer, data.get("amount"), data.get("storeLocation"))
            body = {
                "message": "Purchase recorded successfully",
                "customer": customer.to_json(),
            }
    except LoyaltyError as e:
        logger.warning(f"Purchase rejected for customer {customer_id[:32]!r}: {e.message}")
        raise

    if result.store_location is not None:
        body["storeLocation"] = result.store_location
    return body


@router.patch("/{customer_id}/preferences")
def update_customer_preferences(
    customer_id: str,
    data: dict = Depends(json_body),
    store: CustomerStore = Depends(get_store),
):
    with store.update(parse_customer_id(customer_id)) as customer:
        update_preferences(customer, data)
        return customer.to_json()


@router.patch("/{customer_id}/update-email")
def update_legacy_email(
    customer_id: str,
    data: dict = Depends(json_body),
    store: CustomerStore = Depends(get_store),
):
    """
    Set the email of a legacy customer that has none yet.
    Customers that already have an email must use /preferences instead.
    """
    try:
        with store.update(parse_customer_id(customer_id)) as customer:
            backfill_email(customer, data.get("email"))
            return {
                "message": "Customer email updated successfully",
                "customer": customer.to_json(),
            }
    except LoyaltyError as e:
        logger.warning(f"Email backfill rejected for customer {customer_id[:32]!r}: {e.message}")
        raise
