# db/init.py
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from models.customer import Customer, Status
from settings import settings
from utils.errors import CustomerNotFound

logger = logging.getLogger(__name__)


# ---- Store interface ----
class CustomerStore:
    """
    Holds customer records. Records handed out are live: callers mutate them
    in place and there is no separate save step.
    """

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        raise NotImplementedError

    def all(self) -> list[Customer]:
        raise NotImplementedError

    def add(self, customer: Customer) -> Customer:
        raise NotImplementedError

    def update(self, customer_id: int):
        """Context manager yielding the live record while holding the store lock."""
        raise NotImplementedError


# ---- In-memory backend ----
class InMemoryCustomerStore(CustomerStore):
    def __init__(self):
        self._customers: dict[int, Customer] = {}
        self._lock = threading.RLock()

    def find_by_id(self, customer_id: int) -> Optional[Customer]:
        with self._lock:
            return self._customers.get(customer_id)

    def all(self) -> list[Customer]:
        with self._lock:
            return [self._customers[k] for k in sorted(self._customers)]

    def add(self, customer: Customer) -> Customer:
        with self._lock:
            if customer.id in self._customers:
                raise ValueError(f"Customer {customer.id} already exists")
            self._customers[customer.id] = customer
            return customer

    @contextmanager
    def update(self, customer_id: int) -> Iterator[Customer]:
        # points and status must change together, so the lock spans the whole block
        with self._lock:
            customer = self._customers.get(customer_id)
            if customer is None:
                raise CustomerNotFound()
            yield customer


_store: Optional[CustomerStore] = None


# ---- Store dependency ----
def get_store() -> CustomerStore:
    global _store
    if _store is None:
        _store = init_store(seed=settings.SEED_CUSTOMERS)
    return _store


# ---- Initialization & optional seeding ----
def init_store(seed: bool = True) -> CustomerStore:
    """
    Builds the process-wide store and (optionally) seeds the default
    loyalty members.
    """
    global _store
    _store = InMemoryCustomerStore()
    if seed:
        _seed_default_customers(_store)
    return _store


def default_customers() -> list[Customer]:
    return [
        Customer(
            id=1,
            name="John Smith",
            status=Status.SILVER,
            points=450,
            lastPurchaseDate="2024-02-15",
            joinDate="2023-06-15",
            notifications=True,
            preferredStore="Downtown",
        ),
        Customer(
            id=2,
            name="Jane Doe",
            status=Status.GOLD,
            points=850,
            lastPurchaseDate="2024-03-01",
            email="jane.doe@email.com",
            joinDate="2023-01-20",
            notifications=False,
        ),
    ]


def _seed_default_customers(store: CustomerStore):
    for customer in default_customers():
        if store.find_by_id(customer.id) is None:
            store.add(customer)
    logger.info(f"Seeded {len(store.all())} customers")
