import sys
import os
import unittest
from datetime import datetime, timezone

# Add parent directory to path to import modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models.customer import Customer, Status
from utils.errors import InvalidPurchaseAmount
from utils.loyalty import apply_purchase, base_points, bonus_points, resolve_tier

NOW = datetime(2024, 3, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)


def make_customer(**overrides):
    data = dict(
        id=1,
        name="John Smith",
        status=Status.SILVER,
        points=450,
        lastPurchaseDate="2024-02-15",
        joinDate="2023-06-15",
        notifications=True,
    )
    data.update(overrides)
    return Customer(**data)


class TestPointRules(unittest.TestCase):
    def test_base_points_floor(self):
        self.assertEqual(base_points(99), 9)
        self.assertEqual(base_points(9.99), 0)
        self.assertEqual(base_points(2000), 200)

    def test_base_points_exact_for_large_ints(self):
        self.assertEqual(base_points(10 ** 17 + 9), 10 ** 16)

    def test_bonus_thresholds_are_exclusive(self):
        self.assertEqual(bonus_points(1000, 100), 0)
        self.assertEqual(bonus_points(1000.01, 100), 10)
        self.assertEqual(bonus_points(5000, 500), 50)
        self.assertEqual(bonus_points(5000.01, 500), 100)

    def test_bonus_is_floored(self):
        # 1500 -> 150 base, 10% = 15; 1050 -> 105 base, 10% = 10.5 -> 10
        self.assertEqual(bonus_points(1500, 150), 15)
        self.assertEqual(bonus_points(1050, 105), 10)

    def test_resolve_tier(self):
        self.assertEqual(resolve_tier(750), Status.GOLD)
        self.assertEqual(resolve_tier(749), Status.SILVER)
        self.assertEqual(resolve_tier(500), Status.SILVER)
        self.assertIsNone(resolve_tier(499))


class TestApplyPurchase(unittest.TestCase):
    def test_silver_customer_gets_ten_percent_bonus(self):
        customer = make_customer()
        result = apply_purchase(customer, 2000, "Downtown", now=NOW)

        self.assertEqual(result.base_points, 200)
        self.assertEqual(result.bonus_applied, 20)
        self.assertEqual(result.points_awarded, 220)
        self.assertEqual(customer.points, 670)
        self.assertEqual(customer.status, Status.SILVER)
        self.assertEqual(customer.last_purchase_date, "2024-03-01T12:00:00.123Z")
        # stamped even though the tier did not change
        self.assertEqual(customer.last_status_change, "2024-03-01T12:00:00.123Z")
        self.assertFalse(result.status_changed)
        self.assertEqual(result.store_location, "Downtown")

    def test_second_purchase_promotes_to_gold(self):
        customer = make_customer(points=670)
        result = apply_purchase(customer, 1000, now=NOW)

        self.assertEqual(result.points_awarded, 100)
        self.assertEqual(customer.points, 770)
        self.assertEqual(customer.status, Status.GOLD)
        self.assertTrue(result.status_changed)
        self.assertEqual(result.previous_status, Status.SILVER)

    def test_twenty_percent_bonus_above_5000(self):
        customer = make_customer(points=0, status=Status.BRONZE)
        result = apply_purchase(customer, 6000, now=NOW)

        self.assertEqual(result.base_points, 600)
        self.assertEqual(result.bonus_applied, 120)
        self.assertEqual(customer.points, 720)
        self.assertEqual(customer.status, Status.SILVER)

    def test_below_thresholds_keeps_status_and_stamp(self):
        customer = make_customer(points=10, status=Status.BRONZE)
        apply_purchase(customer, 50, now=NOW)

        self.assertEqual(customer.points, 15)
        self.assertEqual(customer.status, Status.BRONZE)
        self.assertIsNone(customer.last_status_change)
        self.assertEqual(customer.last_purchase_date, "2024-03-01T12:00:00.123Z")

    def test_no_demotion_below_500(self):
        customer = make_customer(points=100, status=Status.GOLD)
        apply_purchase(customer, 10, now=NOW)

        self.assertEqual(customer.status, Status.GOLD)

    def test_invalid_amounts_do_not_mutate(self):
        for amount in (None, 0, -5, "100", True, float("nan"), float("inf"), 10 ** 400):
            customer = make_customer()
            with self.assertRaises(InvalidPurchaseAmount):
                apply_purchase(customer, amount, now=NOW)
            self.assertEqual(customer.points, 450)
            self.assertEqual(customer.last_purchase_date, "2024-02-15")
            self.assertIsNone(customer.last_status_change)

    def test_default_timestamp_format(self):
        customer = make_customer()
        apply_purchase(customer, 10)
        self.assertRegex(customer.last_purchase_date, r"^\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z$")


if __name__ == '__main__':
    unittest.main()
