from pydantic import BaseModel, Field

from secondhand_lite.entrypoints.http.dtos.browse import CategoryResponseDTO, ListingResponseDTO


class CategoryListResponseDTO(BaseModel):
    categories: list[CategoryResponseDTO]


class HomeCategoryResponseDTO(CategoryResponseDTO):
    # None when the counts could not be loaded
    product_count: int | None = None


class HomeFeedResponseDTO(BaseModel):
    categories: list[HomeCategoryResponseDTO]
    featured_listings: list[ListingResponseDTO]
    popular_listings: list[ListingResponseDTO]
    degraded: list[str] = Field(default_factory=list)
