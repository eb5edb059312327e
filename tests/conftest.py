"""Shared listing and category factories."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest

from secondhand_lite.domain.listing import Category, Listing, ListingCategory, Seller

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def make_listing() -> Callable[..., Listing]:
    """
    Build a Listing with sensible defaults.

    ``age_days`` sets created_at relative to BASE_TIME (larger is older).
    """

    def _make(
        id: str,
        title: str,
        price: str = "10.00",
        age_days: int = 0,
        **overrides: Any,
    ) -> Listing:
        fields: dict[str, Any] = {
            "id": id,
            "title": title,
            "description": overrides.pop("description", f"{title} in good shape"),
            "price": Decimal(price),
            "created_at": BASE_TIME - timedelta(days=age_days),
        }
        fields.update(overrides)
        return Listing(**fields)

    return _make


@pytest.fixture()
def seller() -> Seller:
    return Seller(id="seller-1", username="thrift_queen", full_name="Ana Lopez", is_verified=True)


@pytest.fixture()
def categories() -> list[Category]:
    return [
        Category(id="cat-women", name="Women's Clothing", slug="womens-clothing", sort_order=1),
        Category(id="cat-men", name="Men's Clothing", slug="mens-clothing", sort_order=2),
        Category(id="cat-shoes", name="Shoes", slug="shoes", sort_order=3),
        Category(id="cat-bags", name="Bags", slug="bags", sort_order=3),
        Category(id="cat-retired", name="Vintage", slug="vintage", sort_order=0, is_active=False),
        Category(
            id="sub-jackets",
            name="Jackets",
            slug="jackets",
            parent_id="cat-women",
            sort_order=1,
        ),
        Category(
            id="sub-sneakers",
            name="Sneakers",
            slug="sneakers",
            parent_id="cat-shoes",
            sort_order=1,
        ),
    ]


@pytest.fixture()
def listing_category() -> ListingCategory:
    return ListingCategory(id="cat-women", name="Women's Clothing", slug="womens-clothing")
