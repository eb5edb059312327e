from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from secondhand_lite.domain.listing import Category, Listing
from secondhand_lite.entrypoints.http.mappers.home_mapper import HomeMapper
from secondhand_lite.use_cases.get_home_feed import HomeFeed


def test_to_categories_response() -> None:
    categories = [
        Category(id="cat-bags", name="Bags", slug="bags"),
        Category(id="cat-shoes", name="Shoes", slug="shoes"),
    ]

    dto = HomeMapper.to_categories_response(categories)

    assert [c.slug for c in dto.categories] == ["bags", "shoes"]


def test_to_home_response() -> None:
    listing = Listing(
        id="lst-1",
        title="Leather Boots",
        description="Resoled",
        price=Decimal("60.00"),
        created_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
        view_count=300,
    )
    feed = HomeFeed(
        categories=[Category(id="cat-shoes", name="Shoes", slug="shoes")],
        category_counts={"cat-shoes": 7},
        featured_listings=[],
        popular_listings=[listing],
        degraded=("featured_listings",),
    )

    dto = HomeMapper.to_home_response(feed)

    assert dto.categories[0].id == "cat-shoes"
    assert dto.categories[0].product_count == 7
    assert dto.featured_listings == []
    assert dto.popular_listings[0].price == "60.00"
    assert dto.popular_listings[0].view_count == 300
    assert dto.degraded == ["featured_listings"]


def test_to_home_response_empty_feed() -> None:
    dto = HomeMapper.to_home_response(HomeFeed())

    assert dto.model_dump() == {
        "categories": [],
        "featured_listings": [],
        "popular_listings": [],
        "degraded": [],
    }


def test_to_home_response_without_counts() -> None:
    """Categories stay listed with a null count when counts were unavailable."""
    feed = HomeFeed(
        categories=[Category(id="cat-bags", name="Bags", slug="bags")],
        degraded=("category_counts",),
    )

    dto = HomeMapper.to_home_response(feed)

    assert dto.model_dump()["categories"] == [
        {
            "id": "cat-bags",
            "name": "Bags",
            "slug": "bags",
            "icon_url": None,
            "parent_id": None,
            "product_count": None,
        }
    ]
