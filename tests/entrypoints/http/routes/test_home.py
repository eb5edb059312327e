from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from secondhand_lite.domain.errors import InternalError
from secondhand_lite.domain.listing import Category, Listing
from secondhand_lite.entrypoints.http.dependencies import (
    get_home_feed_use_case,
    get_navigation_categories_use_case,
)
from secondhand_lite.entrypoints.http.exception_handlers import register_exception_handlers
from secondhand_lite.entrypoints.http.routes.home import router
from secondhand_lite.use_cases.get_home_feed import HomeFeed


@pytest.fixture
def app() -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def nav_categories() -> list[Category]:
    return [
        Category(id="cat-women", name="Women's Clothing", slug="womens-clothing", sort_order=1),
        Category(id="cat-shoes", name="Shoes", slug="shoes", icon_url="/icons/shoes.svg"),
    ]


def test_list_categories(app: FastAPI, client: TestClient, nav_categories: list[Category]) -> None:
    use_case = Mock()
    use_case.execute.return_value = nav_categories
    app.dependency_overrides[get_navigation_categories_use_case] = lambda: use_case

    response = client.get("/v1/categories")

    assert response.status_code == 200
    assert response.json() == {
        "categories": [
            {
                "id": "cat-women",
                "name": "Women's Clothing",
                "slug": "womens-clothing",
                "icon_url": None,
                "parent_id": None,
            },
            {
                "id": "cat-shoes",
                "name": "Shoes",
                "slug": "shoes",
                "icon_url": "/icons/shoes.svg",
                "parent_id": None,
            },
        ]
    }


def test_list_categories_failure_returns_500(app: FastAPI, client: TestClient) -> None:
    use_case = Mock()
    use_case.execute.side_effect = InternalError("Failed to load categories")
    app.dependency_overrides[get_navigation_categories_use_case] = lambda: use_case

    response = client.get("/v1/categories")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to load categories", "code": "INTERNAL_ERROR"}


def test_home_feed(app: FastAPI, client: TestClient, nav_categories: list[Category]) -> None:
    listing = Listing(
        id="lst-9",
        title="Canvas Tote",
        description="Roomy",
        price=Decimal("12.00"),
        created_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
    )
    use_case = Mock()
    use_case.execute.return_value = HomeFeed(
        categories=nav_categories,
        category_counts={"cat-women": 42, "cat-shoes": 0},
        featured_listings=[listing],
        popular_listings=[],
        degraded=("popular_listings",),
    )
    app.dependency_overrides[get_home_feed_use_case] = lambda: use_case

    response = client.get("/v1/home")

    assert response.status_code == 200
    data = response.json()
    assert [c["slug"] for c in data["categories"]] == ["womens-clothing", "shoes"]
    assert [c["product_count"] for c in data["categories"]] == [42, 0]
    assert data["featured_listings"][0]["title"] == "Canvas Tote"
    assert data["featured_listings"][0]["price"] == "12.00"
    assert data["popular_listings"] == []
    assert data["degraded"] == ["popular_listings"]
