from __future__ import annotations

from unittest.mock import Mock

import pytest

from secondhand_lite.adapters.in_memory_listing_datastore import InMemoryListingDatastore
from secondhand_lite.domain.errors import InternalError
from secondhand_lite.domain.listing import Category
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore
from secondhand_lite.use_cases.list_navigation_categories import ListNavigationCategories


def test_returns_active_top_level_categories(categories: list[Category]) -> None:
    datastore = InMemoryListingDatastore([], categories)

    result = ListNavigationCategories(datastore).execute()

    assert [c.slug for c in result] == ["womens-clothing", "mens-clothing", "bags", "shoes"]


def test_datastore_failure_raises_internal_error() -> None:
    datastore = Mock(spec=ListingDatastore)
    datastore.list_categories.side_effect = DatastoreError("down")

    with pytest.raises(InternalError, match="Failed to load categories"):
        ListNavigationCategories(datastore).execute()
