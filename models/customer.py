from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    GOLD = "GOLD"
    SILVER = "SILVER"
    BRONZE = "BRONZE"


class Customer(BaseModel):
    """A loyalty member. Instances are mutated in place by the store's callers."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    status: Status
    points: int = Field(default=0, ge=0)
    last_purchase_date: str = Field(alias="lastPurchaseDate")
    email: Optional[str] = None
    preferred_store: Optional[str] = Field(default=None, alias="preferredStore")
    join_date: str = Field(alias="joinDate")
    notifications: bool = True
    last_status_change: Optional[str] = Field(default=None, alias="lastStatusChange")

    def to_json(self) -> dict:
        # unset optionals are left out of the body
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
