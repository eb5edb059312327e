"""Assembly of browse responses shared by the full-page and incremental paths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from secondhand_lite.domain.filters import BrowseFilters
from secondhand_lite.domain.listing import Category, Listing
from secondhand_lite.domain.paging import PaginationInfo, Paging

BRAND_SAMPLE_SIZE = 50
BRAND_FACET_LIMIT = 20

# Names used in ``degraded`` when an auxiliary lookup failed
TOTAL_COUNT_SECTION = "total_count"
CATEGORIES_SECTION = "categories"
POPULAR_BRANDS_SECTION = "popular_brands"


@dataclass(frozen=True, slots=True)
class BrowseResult:
    listings: list[Listing]
    total_count: int
    categories: list[Category]
    popular_brands: list[str]
    pagination: PaginationInfo
    filters: BrowseFilters
    degraded: tuple[str, ...] = ()  # Sections substituted with empty data after a failure


@dataclass(frozen=True, slots=True)
class LoadMoreResult:
    listings: list[Listing]
    has_more: bool
    page: int
    failed: bool = False


def popular_brands(samples: Iterable[str | None], limit: int = BRAND_FACET_LIMIT) -> list[str]:
    """Deduplicate, sort and cap sampled brand values."""
    return sorted({brand for brand in samples if brand})[:limit]


def assemble_browse_result(
    *,
    listings: list[Listing],
    total_count: int,
    categories: list[Category],
    brand_samples: Iterable[str | None],
    filters: BrowseFilters,
    degraded: Iterable[str] = (),
) -> BrowseResult:
    paging = filters.paging
    return BrowseResult(
        listings=listings,
        total_count=total_count,
        categories=categories,
        popular_brands=popular_brands(brand_samples),
        pagination=PaginationInfo.from_total(total_count, paging),
        filters=filters,
        degraded=tuple(degraded),
    )


def assemble_load_more_result(listings: list[Listing], paging: Paging) -> LoadMoreResult:
    return LoadMoreResult(
        listings=listings,
        has_more=paging.has_more_after(len(listings)),
        page=paging.page,
    )


def failed_load_more_result(paging: Paging) -> LoadMoreResult:
    """Empty page flagged as failed so infinite scroll stops instead of erroring."""
    return LoadMoreResult(listings=[], has_more=False, page=paging.page, failed=True)
