from __future__ import annotations

import re
from dataclasses import dataclass

from secondhand_lite.domain.filters import BrowseFilters, SortOption
from secondhand_lite.domain.listing import ACTIVE_STATUS
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

_NON_WORD = re.compile(r"\W+")

SORT_ORDERINGS: dict[SortOption, Ordering] = {
    SortOption.PRICE_LOW: Ordering("price", descending=False),
    SortOption.PRICE_HIGH: Ordering("price", descending=True),
    SortOption.POPULAR: Ordering("view_count", descending=True),
    SortOption.LIKED: Ordering("like_count", descending=True),
    SortOption.RECENT: Ordering("created_at", descending=True),
}


@dataclass(frozen=True, slots=True)
class ResolvedCategories:
    """Row ids for the category/subcategory filters; None means the filter is dropped."""

    category_id: str | None = None
    subcategory_id: str | None = None


def search_terms(search: str) -> tuple[str, ...]:
    """
    Whitespace-tokenize search text for the full-text clause.

    Each token keeps only its word characters so it is safe inside a
    text-search query expression; tokens left empty are dropped.
    """
    terms = []
    for token in search.split():
        cleaned = _NON_WORD.sub("", token)
        if cleaned:
            terms.append(cleaned)
    return tuple(terms)


def build_listing_query(
    filters: BrowseFilters,
    resolved: ResolvedCategories | None = None,
) -> ListingQuery:
    """
    Translate browse filters into datastore predicates and a sort ordering.

    Predicates are emitted in a fixed order: status, category, subcategory,
    text search, price bounds, size/brand/condition membership. Category
    filters are applied only when their id was resolved.

    Args:
        filters: Normalized browse filters
        resolved: Category ids looked up for filters.category/subcategory

    Returns:
        ListingQuery whose predicates are shared by the page and count paths
    """
    resolved = resolved or ResolvedCategories()
    predicates: list[Predicate] = [Equals("status", ACTIVE_STATUS)]

    if resolved.category_id is not None:
        predicates.append(Equals("category_id", resolved.category_id))
    if resolved.subcategory_id is not None:
        predicates.append(Equals("subcategory_id", resolved.subcategory_id))

    if filters.search:
        phrase = filters.search.strip()
        if phrase:
            predicates.append(TextMatch(terms=search_terms(phrase), phrase=phrase))

    if filters.min_price is not None:
        predicates.append(AtLeast("price", filters.min_price))
    if filters.max_price is not None:
        predicates.append(AtMost("price", filters.max_price))

    # Empty sets mean "no restriction"
    if filters.sizes:
        predicates.append(OneOf("size", filters.sizes))
    if filters.brands:
        predicates.append(OneOf("brand", filters.brands))
    if filters.conditions:
        predicates.append(OneOf("condition", filters.conditions))

    ordering = SORT_ORDERINGS.get(filters.sort_by, SORT_ORDERINGS[SortOption.RECENT])
    return ListingQuery(predicates=tuple(predicates), ordering=ordering)


def active_listings_query(ordering: Ordering) -> ListingQuery:
    """Unfiltered active listings in the given order (home feed sections)."""
    return ListingQuery(predicates=(Equals("status", ACTIVE_STATUS),), ordering=ordering)


def category_listings_predicates(category_id: str) -> tuple[Predicate, ...]:
    """Active listings filed under a top-level category."""
    return (Equals("status", ACTIVE_STATUS), Equals("category_id", category_id))
