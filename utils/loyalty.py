"""
Points and tier computation for recorded purchases.

Earning rules:
    base points : floor(amount / 10)
    amount > 5000 : +20% of base points (floored)
    amount > 1000 : +10% of base points (floored)

Tier thresholds, checked high to low after points are added:
    GOLD   : points >= 750
    SILVER : points >= 500
    below 500 the current status is kept (no demotion).
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.customer import Customer, Status
from utils.errors import InvalidPurchaseAmount
from utils.timestamps import to_iso, utc_now

logger = logging.getLogger(__name__)

POINTS_PER_UNIT = 10

# (exclusive amount threshold, bonus rate), highest first
BONUS_RATES = [
    (5000, 0.2),
    (1000, 0.1),
]

# (minimum points, tier), highest first
TIER_THRESHOLDS = [
    (750, Status.GOLD),
    (500, Status.SILVER),
]


@dataclass
class PurchaseResult:
    customer: Customer
    base_points: int
    bonus_applied: int
    points_awarded: int
    previous_status: Status
    store_location: Optional[str] = None

    @property
    def status_changed(self) -> bool:
        return self.customer.status != self.previous_status


def validate_amount(amount) -> float:
    # bool is an int subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidPurchaseAmount()
    try:
        finite = math.isfinite(amount)
    except OverflowError:
        # ints too large to represent as a float
        raise InvalidPurchaseAmount()
    if not finite or amount <= 0:
        raise InvalidPurchaseAmount()
    return amount


def base_points(amount: float) -> int:
    if isinstance(amount, int):
        return amount // POINTS_PER_UNIT
    return math.floor(amount / POINTS_PER_UNIT)


def bonus_points(amount: float, base: int) -> int:
    """Bonus on top of base points; thresholds are exclusive."""
    for threshold, rate in BONUS_RATES:
        if amount > threshold:
            return math.floor(base * rate)
    return 0


def resolve_tier(points: int) -> Optional[Status]:
    """Tier for a point balance, or None when no threshold is reached."""
    for minimum, tier in TIER_THRESHOLDS:
        if points >= minimum:
            return tier
    return None


def apply_purchase(
    customer: Customer,
    amount,
    store_location: Optional[str] = None,
    now: Optional[datetime] = None,
) -> PurchaseResult:
    """
    Record a purchase against a live customer record.

    The amount is validated before anything is touched. lastStatusChange is
    stamped whenever a tier threshold is met, even if the tier was already
    held before the purchase.
    """
    amount = validate_amount(amount)

    base = base_points(amount)
    bonus = bonus_points(amount, base)
    awarded = base + bonus
    previous_status = customer.status
    stamp = to_iso(now or utc_now())

    customer.points += awarded
    customer.last_purchase_date = stamp

    tier = resolve_tier(customer.points)
    if tier is not None:
        customer.status = tier
        customer.last_status_change = stamp

    logger.info(
        f"Purchase of {amount} for customer {customer.id}: "
        f"+{awarded} points ({bonus} bonus), balance {customer.points}, status {customer.status.value}"
    )
    if customer.status != previous_status:
        logger.info(f"Customer {customer.id} moved from {previous_status.value} to {customer.status.value}")

    return PurchaseResult(
        customer=customer,
        base_points=base,
        bonus_applied=bonus,
        points_awarded=awarded,
        previous_status=previous_status,
        store_location=store_location,
    )
