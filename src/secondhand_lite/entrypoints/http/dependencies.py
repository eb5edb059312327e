"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Every use case gets a fresh datastore bound to the request's session.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from secondhand_lite.adapters.postgres_listing_datastore import PostgresListingDatastore
from secondhand_lite.infra.db.config import text_search_config
from secondhand_lite.infra.db.session import get_session
from secondhand_lite.ports.listing_datastore import ListingDatastore
from secondhand_lite.use_cases.browse_listings import BrowseListings
from secondhand_lite.use_cases.get_home_feed import GetHomeFeed
from secondhand_lite.use_cases.list_navigation_categories import ListNavigationCategories
from secondhand_lite.use_cases.load_more_listings import LoadMoreListings


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() context manager commits on success,
    rolls back on exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


def get_listing_datastore(db: Session = Depends(get_db)) -> ListingDatastore:
    """Postgres datastore bound to the request session."""
    return PostgresListingDatastore(session=db, text_search_config=text_search_config())


def get_browse_listings_use_case(
    datastore: ListingDatastore = Depends(get_listing_datastore),
) -> BrowseListings:
    return BrowseListings(listing_datastore=datastore)


def get_load_more_listings_use_case(
    datastore: ListingDatastore = Depends(get_listing_datastore),
) -> LoadMoreListings:
    return LoadMoreListings(listing_datastore=datastore)


def get_home_feed_use_case(
    datastore: ListingDatastore = Depends(get_listing_datastore),
) -> GetHomeFeed:
    return GetHomeFeed(listing_datastore=datastore)


def get_navigation_categories_use_case(
    datastore: ListingDatastore = Depends(get_listing_datastore),
) -> ListNavigationCategories:
    return ListNavigationCategories(listing_datastore=datastore)
