from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

ACTIVE_STATUS = "active"


@dataclass(frozen=True)
class Seller:
    id: str
    username: str
    full_name: str | None = None
    avatar_url: str | None = None
    is_verified: bool = False


@dataclass(frozen=True)
class ListingCategory:
    """Category projection embedded in a listing summary."""

    id: str
    name: str
    slug: str
    icon_url: str | None = None


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    slug: str
    icon_url: str | None = None
    parent_id: str | None = None
    sort_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class Listing:
    """
    Listing summary as returned by the browse projection.

    status, category_id and subcategory_id are carried so that predicates can
    be evaluated against the entity; they are not part of the HTTP payload.
    """

    id: str
    title: str
    description: str
    price: Decimal
    created_at: datetime
    currency: str = "USD"
    status: str = ACTIVE_STATUS
    category_id: str | None = None
    subcategory_id: str | None = None
    brand: str | None = None
    size: str | None = None
    condition: str | None = None
    images: tuple[Any, ...] = ()
    location: str | None = None
    view_count: int = 0
    like_count: int = 0
    is_negotiable: bool = False
    shipping_included: bool = False
    shipping_cost: Decimal | None = None
    seller: Seller | None = None
    category: ListingCategory | None = None
