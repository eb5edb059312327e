from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from secondhand_lite.domain.errors import ListingsUnavailableError
from secondhand_lite.domain.filters import BrowseFilters
from secondhand_lite.domain.listing import Category
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore
from secondhand_lite.use_cases.category_resolution import prepare_listing_query
from secondhand_lite.use_cases.result_assembler import (
    BRAND_SAMPLE_SIZE,
    CATEGORIES_SECTION,
    POPULAR_BRANDS_SECTION,
    TOTAL_COUNT_SECTION,
    BrowseResult,
    assemble_browse_result,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class BrowseListingsRequest:
    filters: BrowseFilters


class BrowseListings:
    """
    Faceted listing search for the full browse page.

    Per request:
    1. Resolve category/subcategory filters (misses drop the filter)
    2. Fetch the sorted, paginated page of listings (failure is fatal)
    3. Count all matches with the same predicates, unsorted and unpaged
    4. Fetch facets independent of the user's filters: active categories and
       the popular brand list
    Steps 3 and 4 degrade to empty data on failure and are reported in
    ``BrowseResult.degraded``.
    """

    def __init__(self, listing_datastore: ListingDatastore) -> None:
        self._datastore = listing_datastore

    def execute(self, request: BrowseListingsRequest) -> BrowseResult:
        """
        Execute a browse search.

        Args:
            request: Normalized browse filters, including page and limit

        Returns:
            BrowseResult with listings, total count, facets and pagination

        Raises:
            PagingValidationError: If page/limit are out of range
            ListingsUnavailableError: If the listings page cannot be fetched
        """
        filters = request.filters
        paging = filters.paging
        paging.validate()

        query = prepare_listing_query(self._datastore, filters)

        try:
            listings = self._datastore.fetch_listings(query, paging)
        except DatastoreError as exc:
            logger.error(
                "Listings query failed",
                extra={"error": str(exc), "page": paging.page, "limit": paging.limit},
            )
            raise ListingsUnavailableError() from exc

        degraded: list[str] = []
        total_count = self._auxiliary(
            TOTAL_COUNT_SECTION,
            lambda: self._datastore.count_listings(query.predicates),
            0,
            degraded,
        )
        categories: list[Category] = self._auxiliary(
            CATEGORIES_SECTION,
            self._datastore.list_categories,
            [],
            degraded,
        )
        brand_samples: list[str] = self._auxiliary(
            POPULAR_BRANDS_SECTION,
            lambda: self._datastore.sample_brands(BRAND_SAMPLE_SIZE),
            [],
            degraded,
        )

        return assemble_browse_result(
            listings=listings,
            total_count=total_count,
            categories=categories,
            brand_samples=brand_samples,
            filters=filters,
            degraded=degraded,
        )

    def _auxiliary(
        self,
        section: str,
        fetch: Callable[[], T],
        fallback: T,
        degraded: list[str],
    ) -> T:
        try:
            return fetch()
        except DatastoreError as exc:
            logger.warning(
                "Auxiliary browse query failed, using empty result",
                extra={"section": section, "error": str(exc)},
            )
            degraded.append(section)
            return fallback
