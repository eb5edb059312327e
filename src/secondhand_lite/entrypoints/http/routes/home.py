from fastapi import APIRouter, Depends

from secondhand_lite.entrypoints.http.dependencies import (
    get_home_feed_use_case,
    get_navigation_categories_use_case,
)
from secondhand_lite.entrypoints.http.dtos.home import (
    CategoryListResponseDTO,
    HomeFeedResponseDTO,
)
from secondhand_lite.entrypoints.http.error_responses import ErrorResponse
from secondhand_lite.entrypoints.http.mappers.home_mapper import HomeMapper
from secondhand_lite.use_cases.get_home_feed import GetHomeFeed
from secondhand_lite.use_cases.list_navigation_categories import ListNavigationCategories


router = APIRouter(tags=["Home"])


@router.get(
    "/categories",
    response_model=CategoryListResponseDTO,
    summary="Navigation categories",
    description="Active top-level categories ordered by sort order, then name.",
    responses={500: {"model": ErrorResponse, "description": "Categories could not be loaded"}},
)
def list_categories(
    use_case: ListNavigationCategories = Depends(get_navigation_categories_use_case),
) -> CategoryListResponseDTO:
    return HomeMapper.to_categories_response(use_case.execute())


@router.get(
    "/home",
    response_model=HomeFeedResponseDTO,
    summary="Home feed",
    description="""
    Landing page sections:
    - `categories`: top-level navigation categories
    - `featured_listings`: 16 newest active listings
    - `popular_listings`: 16 most viewed active listings

    A section that fails to load is returned empty and named in `degraded`.
    """,
)
def home_feed(
    use_case: GetHomeFeed = Depends(get_home_feed_use_case),
) -> HomeFeedResponseDTO:
    return HomeMapper.to_home_response(use_case.execute())
