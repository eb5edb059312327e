from __future__ import annotations

import logging

from secondhand_lite.domain.filters import BrowseFilters
from secondhand_lite.domain.predicates import ListingQuery
from secondhand_lite.domain.query_builder import ResolvedCategories, build_listing_query
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore

logger = logging.getLogger(__name__)


def resolve_categories(datastore: ListingDatastore, filters: BrowseFilters) -> ResolvedCategories:
    """
    Resolve the category and subcategory filters independently.

    A value that matches no category, matches several, or whose lookup
    fails resolves to None, which drops that filter instead of emptying
    the result page (stale bookmarked category links keep working).
    """
    return ResolvedCategories(
        category_id=_resolve(datastore, "category", filters.category),
        subcategory_id=_resolve(datastore, "subcategory", filters.subcategory),
    )


def prepare_listing_query(datastore: ListingDatastore, filters: BrowseFilters) -> ListingQuery:
    """Resolve category filters, then build the shared page/count query."""
    return build_listing_query(filters, resolve_categories(datastore, filters))


def _resolve(datastore: ListingDatastore, field: str, value: str | None) -> str | None:
    if not value:
        return None

    try:
        category_id = datastore.resolve_category_id(value)
    except DatastoreError as exc:
        logger.warning(
            "Category lookup failed, dropping filter",
            extra={"field": field, "value": value, "error": str(exc)},
        )
        return None

    if category_id is None:
        logger.info(
            "Category not resolved, dropping filter",
            extra={"field": field, "value": value},
        )
    return category_id
