from __future__ import annotations

import logging
from dataclasses import dataclass

from secondhand_lite.domain.filters import BrowseFilters
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore
from secondhand_lite.use_cases.category_resolution import prepare_listing_query
from secondhand_lite.use_cases.result_assembler import (
    LoadMoreResult,
    assemble_load_more_result,
    failed_load_more_result,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadMoreListingsRequest:
    filters: BrowseFilters


class LoadMoreListings:
    """
    Incremental "load more" page for infinite scroll.

    Runs the same query as the browse page but skips the count and facet
    lookups; has_more is inferred from whether the page came back full.
    Never raises on datastore failure: the result is flagged ``failed``.
    """

    def __init__(self, listing_datastore: ListingDatastore) -> None:
        self._datastore = listing_datastore

    def execute(self, request: LoadMoreListingsRequest) -> LoadMoreResult:
        """
        Raises:
            PagingValidationError: If page/limit are out of range
        """
        filters = request.filters
        paging = filters.paging
        paging.validate()

        query = prepare_listing_query(self._datastore, filters)

        try:
            listings = self._datastore.fetch_listings(query, paging)
        except DatastoreError as exc:
            logger.error(
                "Load more query failed",
                extra={"error": str(exc), "page": paging.page, "limit": paging.limit},
            )
            return failed_load_more_result(paging)

        return assemble_load_more_result(listings, paging)
