from __future__ import annotations

from decimal import Decimal

from secondhand_lite.domain.filters import BrowseFilters
from secondhand_lite.domain.listing import Category, Listing
from secondhand_lite.domain.paging import PaginationInfo
from secondhand_lite.entrypoints.http.dtos.browse import (
    AppliedFiltersResponseDTO,
    BrowseQueryDTO,
    BrowseResponseDTO,
    CategoryResponseDTO,
    ListingCategoryResponseDTO,
    ListingResponseDTO,
    LoadMoreResponseDTO,
    PaginationResponseDTO,
    SellerResponseDTO,
)
from secondhand_lite.use_cases.browse_listings import BrowseListingsRequest
from secondhand_lite.use_cases.load_more_listings import LoadMoreListingsRequest
from secondhand_lite.use_cases.result_assembler import BrowseResult, LoadMoreResult


def _money(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


class BrowseMapper:
    """Maps between REST DTOs and domain models for listing browse."""

    @staticmethod
    def to_domain_filters(
        dto: BrowseQueryDTO,
        category: str | None = None,
        subcategory: str | None = None,
    ) -> BrowseFilters:
        """
        Converts query params to domain filters.

        Path segments of the category landing routes take the place of the
        matching query parameters.

        Args:
            dto: Raw browse query parameters
            category: Category path segment, if any
            subcategory: Subcategory path segment, if any

        Returns:
            BrowseFilters: Normalized domain filters
        """
        params = dto.model_dump(exclude_none=True)
        if category is not None:
            params["category"] = category
        if subcategory is not None:
            params["subcategory"] = subcategory
        return BrowseFilters.from_query_params(params)

    @staticmethod
    def to_browse_request(
        dto: BrowseQueryDTO,
        category: str | None = None,
        subcategory: str | None = None,
    ) -> BrowseListingsRequest:
        return BrowseListingsRequest(
            filters=BrowseMapper.to_domain_filters(dto, category, subcategory)
        )

    @staticmethod
    def to_load_more_request(dto: BrowseQueryDTO) -> LoadMoreListingsRequest:
        return LoadMoreListingsRequest(filters=BrowseMapper.to_domain_filters(dto))

    @staticmethod
    def to_listing_response(listing: Listing) -> ListingResponseDTO:
        """
        Converts domain Listing entity to REST response DTO.

        Handles Decimal -> str conversion at the boundary.
        """
        seller = None
        if listing.seller is not None:
            seller = SellerResponseDTO(
                id=listing.seller.id,
                username=listing.seller.username,
                full_name=listing.seller.full_name,
                avatar_url=listing.seller.avatar_url,
                is_verified=listing.seller.is_verified,
            )

        category = None
        if listing.category is not None:
            category = ListingCategoryResponseDTO(
                id=listing.category.id,
                name=listing.category.name,
                slug=listing.category.slug,
                icon_url=listing.category.icon_url,
            )

        return ListingResponseDTO(
            id=listing.id,
            title=listing.title,
            description=listing.description,
            price=str(listing.price),
            currency=listing.currency,
            brand=listing.brand,
            size=listing.size,
            condition=listing.condition,
            images=list(listing.images),
            location=listing.location,
            view_count=listing.view_count,
            like_count=listing.like_count,
            is_negotiable=listing.is_negotiable,
            shipping_included=listing.shipping_included,
            shipping_cost=_money(listing.shipping_cost),
            created_at=listing.created_at,
            seller=seller,
            category=category,
        )

    @staticmethod
    def to_category_response(category: Category) -> CategoryResponseDTO:
        return CategoryResponseDTO(
            id=category.id,
            name=category.name,
            slug=category.slug,
            icon_url=category.icon_url,
            parent_id=category.parent_id,
        )

    @staticmethod
    def to_pagination_response(pagination: PaginationInfo) -> PaginationResponseDTO:
        return PaginationResponseDTO(
            current_page=pagination.current_page,
            total_pages=pagination.total_pages,
            has_next_page=pagination.has_next_page,
            has_prev_page=pagination.has_prev_page,
            limit=pagination.limit,
        )

    @staticmethod
    def to_filters_response(filters: BrowseFilters) -> AppliedFiltersResponseDTO:
        """Echo of the normalized filters applied to the query."""
        return AppliedFiltersResponseDTO(
            category=filters.category,
            subcategory=filters.subcategory,
            search=filters.search,
            min_price=_money(filters.min_price),
            max_price=_money(filters.max_price),
            sizes=list(filters.sizes),
            brands=list(filters.brands),
            conditions=list(filters.conditions),
            sort_by=filters.sort_by.value,
        )

    @staticmethod
    def to_response(result: BrowseResult) -> BrowseResponseDTO:
        return BrowseResponseDTO(
            listings=[BrowseMapper.to_listing_response(listing) for listing in result.listings],
            total_count=result.total_count,
            categories=[BrowseMapper.to_category_response(c) for c in result.categories],
            popular_brands=result.popular_brands,
            pagination=BrowseMapper.to_pagination_response(result.pagination),
            filters=BrowseMapper.to_filters_response(result.filters),
            degraded=list(result.degraded),
        )

    @staticmethod
    def to_load_more_response(result: LoadMoreResult) -> LoadMoreResponseDTO:
        return LoadMoreResponseDTO(
            listings=[BrowseMapper.to_listing_response(listing) for listing in result.listings],
            has_more=result.has_more,
            page=result.page,
            failed=result.failed,
        )
