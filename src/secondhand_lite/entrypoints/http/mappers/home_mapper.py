from __future__ import annotations

from secondhand_lite.domain.listing import Category
from secondhand_lite.entrypoints.http.dtos.home import (
    CategoryListResponseDTO,
    HomeCategoryResponseDTO,
    HomeFeedResponseDTO,
)
from secondhand_lite.entrypoints.http.mappers.browse_mapper import BrowseMapper
from secondhand_lite.use_cases.get_home_feed import HomeFeed


class HomeMapper:
    """Maps home feed and navigation results to REST DTOs."""

    @staticmethod
    def to_categories_response(categories: list[Category]) -> CategoryListResponseDTO:
        return CategoryListResponseDTO(
            categories=[BrowseMapper.to_category_response(c) for c in categories]
        )

    @staticmethod
    def to_home_category_response(category: Category, product_count: int | None) -> HomeCategoryResponseDTO:
        return HomeCategoryResponseDTO(
            **BrowseMapper.to_category_response(category).model_dump(),
            product_count=product_count,
        )

    @staticmethod
    def to_home_response(feed: HomeFeed) -> HomeFeedResponseDTO:
        return HomeFeedResponseDTO(
            categories=[
                HomeMapper.to_home_category_response(c, feed.category_counts.get(c.id))
                for c in feed.categories
            ],
            featured_listings=[
                BrowseMapper.to_listing_response(listing) for listing in feed.featured_listings
            ],
            popular_listings=[
                BrowseMapper.to_listing_response(listing) for listing in feed.popular_listings
            ],
            degraded=list(feed.degraded),
        )
