from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from secondhand_lite.domain.filters import SortOption
from secondhand_lite.domain.listing import Category, Listing
from secondhand_lite.domain.paging import Paging
from secondhand_lite.domain.query_builder import (
    SORT_ORDERINGS,
    active_listings_query,
    category_listings_predicates,
)
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore

logger = logging.getLogger(__name__)

T = TypeVar("T")

HOME_SECTION_SIZE = 16


@dataclass(frozen=True, slots=True)
class HomeFeed:
    categories: list[Category] = field(default_factory=list)
    # Active listings per category id; empty when the counts could not be loaded
    category_counts: dict[str, int] = field(default_factory=dict)
    featured_listings: list[Listing] = field(default_factory=list)
    popular_listings: list[Listing] = field(default_factory=list)
    degraded: tuple[str, ...] = ()


class GetHomeFeed:
    """
    Landing page sections: top-level categories with their listing counts,
    newest listings and most viewed listings. Each section degrades to
    empty independently.
    """

    def __init__(self, listing_datastore: ListingDatastore, section_size: int = HOME_SECTION_SIZE) -> None:
        self._datastore = listing_datastore
        self._paging = Paging(page=1, limit=section_size)

    def execute(self) -> HomeFeed:
        degraded: list[str] = []

        categories = self._section(
            "categories", lambda: self._datastore.list_categories(top_level_only=True), [], degraded
        )
        category_counts: dict[str, int] = {}
        if categories:
            category_counts = self._section(
                "category_counts", lambda: self._count_per_category(categories), {}, degraded
            )
        featured = self._section(
            "featured_listings", lambda: self._listings(SortOption.RECENT), [], degraded
        )
        popular = self._section(
            "popular_listings", lambda: self._listings(SortOption.POPULAR), [], degraded
        )

        return HomeFeed(
            categories=categories,
            category_counts=category_counts,
            featured_listings=featured,
            popular_listings=popular,
            degraded=tuple(degraded),
        )

    def _listings(self, sort_by: SortOption) -> list[Listing]:
        query = active_listings_query(SORT_ORDERINGS[sort_by])
        return self._datastore.fetch_listings(query, self._paging)

    def _count_per_category(self, categories: list[Category]) -> dict[str, int]:
        return {
            category.id: self._datastore.count_listings(category_listings_predicates(category.id))
            for category in categories
        }

    def _section(self, name: str, fetch: Callable[[], T], empty: T, degraded: list[str]) -> T:
        try:
            return fetch()
        except DatastoreError as exc:
            logger.warning("Home feed section failed", extra={"section": name, "error": str(exc)})
            degraded.append(name)
            return empty
