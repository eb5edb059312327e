from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SellerResponseDTO(BaseModel):
    id: str
    username: str
    full_name: str | None = None
    avatar_url: str | None = None
    is_verified: bool = False


class ListingCategoryResponseDTO(BaseModel):
    id: str
    name: str
    slug: str
    icon_url: str | None = None


class ListingResponseDTO(BaseModel):
    id: str
    title: str
    description: str
    price: str
    currency: str
    brand: str | None = None
    size: str | None = None
    condition: str | None = None
    images: list[Any] = Field(default_factory=list)
    location: str | None = None
    view_count: int
    like_count: int
    is_negotiable: bool
    shipping_included: bool
    shipping_cost: str | None = None
    created_at: datetime
    seller: SellerResponseDTO | None = None
    category: ListingCategoryResponseDTO | None = None


class CategoryResponseDTO(BaseModel):
    id: str
    name: str
    slug: str
    icon_url: str | None = None
    parent_id: str | None = None


class BrowseQueryDTO(BaseModel):
    """
    Query parameters shared by /browse and /browse/load-more.

    Every field is an optional string: malformed values are normalized by the
    domain parser instead of being rejected.
    """

    category: str | None = Field(
        default=None,
        description="Category slug, or part of its name",
        examples=["womens-clothing"],
    )
    subcategory: str | None = Field(
        default=None,
        description="Subcategory slug, or part of its name",
        examples=["jackets"],
    )
    q: str | None = Field(
        default=None,
        description="Free-text search over title, description and brand",
        examples=["denim jacket"],
    )
    min_price: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["20.00"],
    )
    max_price: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["100.00"],
    )
    sizes: str | None = Field(
        default=None,
        description="Comma-separated sizes",
        examples=["S,M"],
    )
    brands: str | None = Field(
        default=None,
        description="Comma-separated brands",
        examples=["Levi's,Zara"],
    )
    conditions: str | None = Field(
        default=None,
        description="Comma-separated conditions",
        examples=["new,like-new"],
    )
    sort: str | None = Field(
        default=None,
        description="recent (default), price-low, price-high, popular or liked",
        examples=["price-low"],
    )
    page: str | None = Field(
        default=None,
        description="Page number, starting at 1",
        examples=["1"],
    )
    limit: str | None = Field(
        default=None,
        description="Page size (default 24, max 100)",
        examples=["24"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "q": "denim jacket",
                "min_price": "20.00",
                "max_price": "100.00",
                "sizes": "M",
                "sort": "price-low",
                "page": "1",
                "limit": "24",
            }
        }
    )


class PaginationResponseDTO(BaseModel):
    current_page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
    limit: int


class AppliedFiltersResponseDTO(BaseModel):
    category: str | None = None
    subcategory: str | None = None
    search: str | None = None
    min_price: str | None = None
    max_price: str | None = None
    sizes: list[str] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    sort_by: str


class BrowseResponseDTO(BaseModel):
    listings: list[ListingResponseDTO]
    total_count: int
    categories: list[CategoryResponseDTO]
    popular_brands: list[str]
    pagination: PaginationResponseDTO
    filters: AppliedFiltersResponseDTO
    degraded: list[str] = Field(
        default_factory=list,
        description="Auxiliary sections replaced by empty data after a lookup failure",
    )


class LoadMoreResponseDTO(BaseModel):
    listings: list[ListingResponseDTO]
    has_more: bool
    page: int
    failed: bool = False
