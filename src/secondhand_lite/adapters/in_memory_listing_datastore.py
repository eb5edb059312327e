from __future__ import annotations

import re

from secondhand_lite.domain.listing import ACTIVE_STATUS, Category, Listing
from secondhand_lite.domain.paging import Paging
from secondhand_lite.domain.predicates import (
    AtLeast,
    AtMost,
    Equals,
    ListingQuery,
    OneOf,
    Ordering,
    Predicate,
    TextMatch,
)
from secondhand_lite.ports.listing_datastore import ListingDatastore

_WORD = re.compile(r"\w+")


class InMemoryListingDatastore(ListingDatastore):
    """
    Canonical contract implementation for tests.

    - Stores listings and categories in insertion order (the natural row order)
    - Applies AND-semantics filtering
    - Sorts stably, so ties keep insertion order
    - Applies paging AFTER filtering and sorting
    - Full-text matching is whole-word and case-insensitive, without stemming
    """

    def __init__(self, listings: list[Listing], categories: list[Category] | None = None) -> None:
        self._listings = listings
        self._categories = categories or []

    def resolve_category_id(self, slug_or_name: str) -> str | None:
        needle = slug_or_name.lower()
        matches = [
            category
            for category in self._categories
            if category.slug == slug_or_name or needle in category.name.lower()
        ]
        return matches[0].id if len(matches) == 1 else None

    def fetch_listings(self, query: ListingQuery, paging: Paging) -> list[Listing]:
        matches = self._filter(query.predicates)
        ordered = self._order(matches, query.ordering)

        start, end = paging.window
        return ordered[start:end]

    def count_listings(self, predicates: tuple[Predicate, ...]) -> int:
        return len(self._filter(predicates))

    def list_categories(self, *, top_level_only: bool = False) -> list[Category]:
        categories = [
            category
            for category in self._categories
            if category.is_active and not (top_level_only and category.parent_id is not None)
        ]
        return sorted(categories, key=lambda category: (category.sort_order, category.name))

    def sample_brands(self, limit: int) -> list[str]:
        brands = [
            listing.brand
            for listing in self._listings
            if listing.status == ACTIVE_STATUS and listing.brand is not None
        ]
        return brands[:limit]

    def _filter(self, predicates: tuple[Predicate, ...]) -> list[Listing]:
        return [
            listing
            for listing in self._listings
            if all(self._matches(listing, predicate) for predicate in predicates)
        ]

    def _order(self, listings: list[Listing], ordering: Ordering) -> list[Listing]:
        # sorted() is stable for reverse=True as well
        return sorted(
            listings,
            key=lambda listing: getattr(listing, ordering.field),
            reverse=ordering.descending,
        )

    def _matches(self, listing: Listing, predicate: Predicate) -> bool:
        if isinstance(predicate, Equals):
            return getattr(listing, predicate.field) == predicate.value
        if isinstance(predicate, AtLeast):
            value = getattr(listing, predicate.field)
            return value is not None and value >= predicate.value
        if isinstance(predicate, AtMost):
            value = getattr(listing, predicate.field)
            return value is not None and value <= predicate.value
        if isinstance(predicate, OneOf):
            return getattr(listing, predicate.field) in predicate.values
        if isinstance(predicate, TextMatch):
            return self._full_text_match(listing, predicate) or self._substring_match(
                listing, predicate
            )
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _full_text_match(self, listing: Listing, predicate: TextMatch) -> bool:
        terms = {term.lower() for term in predicate.terms}
        if not terms:
            return False
        for field in predicate.full_text_fields:
            words = set(_WORD.findall((getattr(listing, field) or "").lower()))
            if terms & words:
                return True
        return False

    def _substring_match(self, listing: Listing, predicate: TextMatch) -> bool:
        phrase = predicate.phrase.lower()
        return any(
            phrase in (getattr(listing, field) or "").lower()
            for field in predicate.substring_fields
        )
