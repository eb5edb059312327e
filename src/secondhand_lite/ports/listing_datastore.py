from __future__ import annotations

from abc import ABC, abstractmethod

from secondhand_lite.domain.listing import Category, Listing
from secondhand_lite.domain.paging import Paging
from secondhand_lite.domain.predicates import ListingQuery, Predicate


class DatastoreError(Exception):
    """
    Raised by adapters when an underlying query fails.

    Adapters wrap driver/ORM exceptions in this type so callers never depend
    on a specific database library.
    """


class ListingDatastore(ABC):
    """
    Port for listing and category reads.

    Contract:
        - predicates are AND-ed; an empty predicate tuple matches every row
        - fetch_listings applies ordering, then the paging window
        - rows that tie on the ordering keep the datastore's natural order
        - every method raises DatastoreError on failure, never a raw driver error
    """

    @abstractmethod
    def resolve_category_id(self, slug_or_name: str) -> str | None:
        """
        Look up a category id by slug (exact) or name (case-insensitive contains).

        Returns:
            The id when exactly one category matches, otherwise None
        """
        ...

    @abstractmethod
    def fetch_listings(self, query: ListingQuery, paging: Paging) -> list[Listing]:
        """Return one ordered page of listings matching query.predicates."""
        ...

    @abstractmethod
    def count_listings(self, predicates: tuple[Predicate, ...]) -> int:
        """Count all listings matching predicates, independent of any paging."""
        ...

    @abstractmethod
    def list_categories(self, *, top_level_only: bool = False) -> list[Category]:
        """Active categories ordered by sort_order, then name."""
        ...

    @abstractmethod
    def sample_brands(self, limit: int) -> list[str]:
        """Brand values of up to ``limit`` active listings with a brand set (may repeat)."""
        ...
