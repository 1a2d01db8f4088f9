"""Domain models for assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AssetStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    MAINTENANCE = "MAINTENANCE"
    DAMAGED = "DAMAGED"
    RETIRED = "RETIRED"


@dataclass(slots=True)
class Borrower:
    id: str
    username: str


@dataclass(slots=True)
class Asset:
    id: str
    name: str
    serial_number: str
    category_id: str
    status: AssetStatus
    cost: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    image_url: Optional[str] = None
    current_holder_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    borrowed_by: Optional[Borrower] = field(default=None, compare=False)

    def is_borrowable(self) -> bool:
        return self.status == AssetStatus.AVAILABLE


@dataclass(slots=True)
class AssetPage:
    total: int
    items: list[Asset]


@dataclass(slots=True)
class AssetCreateInput:
    name: str
    serial_number: str
    category_id: str
    status: AssetStatus | str = AssetStatus.AVAILABLE
    cost: Optional[Decimal] = None
    purchase_date: Optional[date] = None
    image_url: Optional[str] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AssetUpdateInput:
    name: str | object = UNSET
    serial_number: str | object = UNSET
    category_id: str | object = UNSET
    status: AssetStatus | str | object = UNSET
    cost: Optional[Decimal] | object = UNSET
    purchase_date: Optional[date] | object = UNSET
    image_url: Optional[str] | object = UNSET
