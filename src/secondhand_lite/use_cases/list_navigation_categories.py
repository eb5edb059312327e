from __future__ import annotations

from secondhand_lite.domain.errors import InternalError
from secondhand_lite.domain.listing import Category
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore


class ListNavigationCategories:
    """Active top-level categories for site navigation, by sort order then name."""

    def __init__(self, listing_datastore: ListingDatastore) -> None:
        self._datastore = listing_datastore

    def execute(self) -> list[Category]:
        """
        Raises:
            InternalError: If categories cannot be loaded
        """
        try:
            return self._datastore.list_categories(top_level_only=True)
        except DatastoreError as exc:
            raise InternalError("Failed to load categories") from exc
