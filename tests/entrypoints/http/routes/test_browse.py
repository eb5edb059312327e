"""
Test suite for the /v1/browse routes.

Verifies the HTTP endpoint behavior:
- Query parameters are passed through the mapper as raw strings
- Malformed parameters are normalized, never rejected
- Category landing routes take category/subcategory from the path
- Domain errors map to structured error responses
- Load-more failures return HTTP 500 with failed=true
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from secondhand_lite.domain.errors import ListingsUnavailableError, PagingValidationError
from secondhand_lite.domain.filters import BrowseFilters, SortOption
from secondhand_lite.domain.listing import Category, Listing, ListingCategory, Seller
from secondhand_lite.domain.paging import PaginationInfo
from secondhand_lite.entrypoints.http.dependencies import (
    get_browse_listings_use_case,
    get_db,
    get_load_more_listings_use_case,
)
from secondhand_lite.entrypoints.http.routes.browse import router
from secondhand_lite.use_cases.result_assembler import BrowseResult, LoadMoreResult


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with the browse router and exception handlers."""
    from secondhand_lite.entrypoints.http.exception_handlers import register_exception_handlers

    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_use_case() -> Mock:
    """Mock use case for testing route in isolation."""
    return Mock()


@pytest.fixture
def sample_listing() -> Listing:
    return Listing(
        id="lst-1",
        title="Blue Denim Jacket",
        description="Worn twice",
        price=Decimal("30.00"),
        created_at=datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc),
        brand="Levi's",
        size="M",
        condition="good",
        images=("https://cdn.example.com/jacket.jpg",),
        view_count=40,
        like_count=5,
        shipping_cost=Decimal("4.50"),
        seller=Seller(id="seller-1", username="thrift_queen", is_verified=True),
        category=ListingCategory(id="cat-women", name="Women's Clothing", slug="womens-clothing"),
    )


def browse_result(listings: list[Listing], filters: BrowseFilters, total: int) -> BrowseResult:
    return BrowseResult(
        listings=listings,
        total_count=total,
        categories=[Category(id="cat-women", name="Women's Clothing", slug="womens-clothing")],
        popular_brands=["Levi's", "Zara"],
        pagination=PaginationInfo.from_total(total, filters.paging),
        filters=filters,
    )


def sent_filters(mock_use_case: Mock) -> BrowseFilters:
    (request,) = mock_use_case.execute.call_args.args
    return request.filters


# ==============================================================================
# GET /v1/browse
# ==============================================================================


def test_browse_success_with_all_filters(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_listing: Listing
) -> None:
    filters = BrowseFilters(
        search="denim jacket",
        min_price=Decimal("20"),
        max_price=Decimal("100"),
        sizes=("M",),
        sort_by=SortOption.PRICE_LOW,
        limit=2,
    )
    mock_use_case.execute.return_value = browse_result([sample_listing], filters, total=1)
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get(
        "/v1/browse",
        params={
            "q": "denim jacket",
            "min_price": "20",
            "max_price": "100",
            "sizes": "M",
            "sort": "price-low",
            "page": "1",
            "limit": "2",
        },
    )

    assert response.status_code == 200
    data = response.json()

    assert sent_filters(mock_use_case) == filters

    assert data["total_count"] == 1
    assert data["popular_brands"] == ["Levi's", "Zara"]
    assert data["categories"][0]["slug"] == "womens-clothing"
    assert data["pagination"] == {
        "current_page": 1,
        "total_pages": 1,
        "has_next_page": False,
        "has_prev_page": False,
        "limit": 2,
    }
    assert data["filters"]["search"] == "denim jacket"
    assert data["filters"]["min_price"] == "20"
    assert data["filters"]["sizes"] == ["M"]
    assert data["filters"]["sort_by"] == "price-low"
    assert data["degraded"] == []

    listing = data["listings"][0]
    assert listing["title"] == "Blue Denim Jacket"
    assert listing["price"] == "30.00"
    assert listing["shipping_cost"] == "4.50"
    assert listing["seller"]["username"] == "thrift_queen"
    assert listing["category"]["slug"] == "womens-clothing"


def test_browse_without_params_uses_defaults(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.return_value = browse_result([], BrowseFilters(), total=0)
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse")

    assert response.status_code == 200
    assert sent_filters(mock_use_case) == BrowseFilters()
    assert response.json()["pagination"]["total_pages"] == 0


def test_browse_normalizes_malformed_params(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    """Malformed values are coerced to defaults instead of returning 422."""
    mock_use_case.execute.return_value = browse_result([], BrowseFilters(), total=0)
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get(
        "/v1/browse",
        params={
            "min_price": "cheap",
            "page": "-2",
            "limit": "abc",
            "sort": "random",
            "sizes": ",,",
            "q": "   ",
        },
    )

    assert response.status_code == 200
    assert sent_filters(mock_use_case) == BrowseFilters()


def test_browse_caps_limit(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    mock_use_case.execute.return_value = browse_result([], BrowseFilters(limit=100), total=0)
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse", params={"limit": "1000"})

    assert response.status_code == 200
    assert sent_filters(mock_use_case).limit == 100


def test_browse_reports_degraded_sections(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    result = BrowseResult(
        listings=[],
        total_count=0,
        categories=[],
        popular_brands=[],
        pagination=PaginationInfo.from_total(0, BrowseFilters().paging),
        filters=BrowseFilters(),
        degraded=("total_count", "popular_brands"),
    )
    mock_use_case.execute.return_value = result
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse")

    assert response.status_code == 200
    assert response.json()["degraded"] == ["total_count", "popular_brands"]


# ==============================================================================
# Category landing routes
# ==============================================================================


def test_browse_category_path(app: FastAPI, client: TestClient, mock_use_case: Mock) -> None:
    filters = BrowseFilters(category="shoes")
    mock_use_case.execute.return_value = browse_result([], filters, total=0)
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/shoes", params={"sort": "popular"})

    assert response.status_code == 200
    sent = sent_filters(mock_use_case)
    assert sent.category == "shoes"
    assert sent.sort_by is SortOption.POPULAR


def test_browse_subcategory_path_overrides_query(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    filters = BrowseFilters(category="shoes", subcategory="sneakers")
    mock_use_case.execute.return_value = browse_result([], filters, total=0)
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/shoes/sneakers", params={"category": "bags"})

    assert response.status_code == 200
    sent = sent_filters(mock_use_case)
    assert sent.category == "shoes"
    assert sent.subcategory == "sneakers"


# ==============================================================================
# Error Responses
# ==============================================================================


def test_browse_listings_unavailable_returns_500(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = ListingsUnavailableError()
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to load listings", "code": "INTERNAL_ERROR"}


def test_browse_paging_error_returns_422(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = PagingValidationError("limit must be <= 100")
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse")

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_browse_unexpected_error_returns_500(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = RuntimeError("boom")
    app.dependency_overrides[get_browse_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse")

    assert response.status_code == 500
    assert response.json()["detail"] == "An unexpected error occurred"


# ==============================================================================
# GET /v1/browse/load-more
# ==============================================================================


def test_load_more_success(
    app: FastAPI, client: TestClient, mock_use_case: Mock, sample_listing: Listing
) -> None:
    mock_use_case.execute.return_value = LoadMoreResult(
        listings=[sample_listing], has_more=True, page=2
    )
    app.dependency_overrides[get_load_more_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/load-more", params={"page": "2", "limit": "1", "q": "denim"})

    assert response.status_code == 200
    data = response.json()
    assert data["has_more"] is True
    assert data["page"] == 2
    assert data["failed"] is False
    assert data["listings"][0]["id"] == "lst-1"
    assert set(data) == {"listings", "has_more", "page", "failed"}

    sent = sent_filters(mock_use_case)
    assert sent.page == 2
    assert sent.limit == 1
    assert sent.search == "denim"


def test_load_more_is_not_captured_by_category_route(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    browse_use_case = Mock()
    mock_use_case.execute.return_value = LoadMoreResult(listings=[], has_more=False, page=1)
    app.dependency_overrides[get_load_more_listings_use_case] = lambda: mock_use_case
    app.dependency_overrides[get_browse_listings_use_case] = lambda: browse_use_case

    response = client.get("/v1/browse/load-more")

    assert response.status_code == 200
    mock_use_case.execute.assert_called_once()
    browse_use_case.execute.assert_not_called()


def test_load_more_failure_returns_500_with_failed_flag(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.return_value = LoadMoreResult(
        listings=[], has_more=False, page=3, failed=True
    )
    app.dependency_overrides[get_load_more_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/load-more", params={"page": "3"})

    assert response.status_code == 500
    assert response.json() == {"listings": [], "has_more": False, "page": 3, "failed": True}


def test_load_more_unexpected_error_returns_failed_flag(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    """Any failure answers with the load-more shape, not the generic error body."""
    mock_use_case.execute.side_effect = RuntimeError("Unexpected failure")
    app.dependency_overrides[get_load_more_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/load-more", params={"page": "2", "limit": "10"})

    assert response.status_code == 500
    assert response.json() == {"listings": [], "has_more": False, "page": 2, "failed": True}


def test_load_more_dependency_failure_returns_failed_flag(
    app: FastAPI, client: TestClient
) -> None:
    """A session that cannot be opened (e.g. DATABASE_URL unset) still yields failed=true."""

    def unavailable_db():
        raise RuntimeError("DATABASE_URL environment variable is not set")

    app.dependency_overrides[get_db] = unavailable_db

    response = client.get("/v1/browse/load-more", params={"page": "4"})

    assert response.status_code == 500
    assert response.json() == {"listings": [], "has_more": False, "page": 4, "failed": True}


def test_load_more_failure_with_malformed_page_reports_default_page(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = RuntimeError("Unexpected failure")
    app.dependency_overrides[get_load_more_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/load-more", params={"page": "abc"})

    assert response.status_code == 500
    assert response.json()["page"] == 1
    assert response.json()["failed"] is True


def test_load_more_paging_error_keeps_validation_response(
    app: FastAPI, client: TestClient, mock_use_case: Mock
) -> None:
    mock_use_case.execute.side_effect = PagingValidationError("page must be >= 1")
    app.dependency_overrides[get_load_more_listings_use_case] = lambda: mock_use_case

    response = client.get("/v1/browse/load-more")

    assert response.status_code == 422
    assert response.json() == {"detail": "page must be >= 1", "code": "VALIDATION_ERROR"}


def test_browse_dependency_failure_keeps_generic_error_body(
    app: FastAPI, client: TestClient
) -> None:
    def unavailable_db():
        raise RuntimeError("DATABASE_URL environment variable is not set")

    app.dependency_overrides[get_db] = unavailable_db

    response = client.get("/v1/browse")

    assert response.status_code == 500
    assert response.json() == {"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"}
