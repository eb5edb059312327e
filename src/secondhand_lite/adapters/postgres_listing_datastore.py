"""PostgreSQL implementation of ListingDatastore."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from sqlalchemy import cast, func, literal, or_, select
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from secondhand_lite.domain.listing import (
    ACTIVE_STATUS,
    Category,
    Listing,
    ListingCategory,
    Seller,
)
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
from secondhand_lite.infra.db.config import DEFAULT_TEXT_SEARCH_CONFIG
from secondhand_lite.infra.db.models import CategoryRow, ListingRow
from secondhand_lite.ports.listing_datastore import DatastoreError, ListingDatastore

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Result
    from sqlalchemy.sql import Select

T = TypeVar("T")

LIKE_ESCAPE = "\\"

# OFFSET is a bigint in PostgreSQL
MAX_ROW_OFFSET = 2**63 - 1

_LISTING_COLUMNS: dict[str, Any] = {
    "status": ListingRow.status,
    "category_id": ListingRow.category_id,
    "subcategory_id": ListingRow.subcategory_id,
    "title": ListingRow.title,
    "description": ListingRow.description,
    "brand": ListingRow.brand,
    "size": ListingRow.size,
    "condition": ListingRow.condition,
    "price": ListingRow.price,
    "view_count": ListingRow.view_count,
    "like_count": ListingRow.like_count,
    "created_at": ListingRow.created_at,
}

_UUID_FIELDS = frozenset({"category_id", "subcategory_id"})


def contains_pattern(value: str) -> str:
    """ILIKE pattern matching ``value`` anywhere, with LIKE wildcards escaped."""
    escaped = (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class PostgresListingDatastore(ListingDatastore):
    """
    PostgreSQL implementation of ListingDatastore.

    - Uses SQLAlchemy ORM for database access
    - Compiles domain predicates into WHERE clauses (one compiler for page and count)
    - Full-text clause uses to_tsvector/to_tsquery with OR-joined terms
    - Runs each read inside a SAVEPOINT so a failed auxiliary query leaves the
      request transaction usable for the remaining reads
    - Converts ListingRow (infrastructure) to Listing (domain)
    """

    def __init__(
        self,
        session: Session,
        text_search_config: str = DEFAULT_TEXT_SEARCH_CONFIG,
    ) -> None:
        """
        Initialize datastore with database session.

        Args:
            session: SQLAlchemy session for database operations
            text_search_config: PostgreSQL text search configuration name
        """
        self._session = session
        self._text_search_config = text_search_config

    def resolve_category_id(self, slug_or_name: str) -> str | None:
        # Two rows are enough to tell "unique" from "ambiguous"
        query = (
            select(CategoryRow.id)
            .where(
                or_(
                    CategoryRow.slug == slug_or_name,
                    CategoryRow.name.ilike(contains_pattern(slug_or_name), escape=LIKE_ESCAPE),
                )
            )
            .limit(2)
        )
        ids = self._read(query, lambda result: result.scalars().all())
        return str(ids[0]) if len(ids) == 1 else None

    def fetch_listings(self, query: ListingQuery, paging: Paging) -> list[Listing]:
        if paging.offset > MAX_ROW_OFFSET:
            return []

        statement = (
            self._build_select(query)
            .offset(paging.offset)
            .limit(paging.limit)
        )
        rows = self._read(statement, lambda result: result.scalars().all())
        return [self._to_domain(row) for row in rows]

    def count_listings(self, predicates: tuple[Predicate, ...]) -> int:
        statement = (
            select(func.count())
            .select_from(ListingRow)
            .where(*self._where(predicates))
        )
        return self._read(statement, lambda result: result.scalar_one()) or 0

    def list_categories(self, *, top_level_only: bool = False) -> list[Category]:
        statement = select(CategoryRow).where(CategoryRow.is_active.is_(True))
        if top_level_only:
            statement = statement.where(CategoryRow.parent_id.is_(None))
        statement = statement.order_by(CategoryRow.sort_order, CategoryRow.name)

        rows = self._read(statement, lambda result: result.scalars().all())
        return [self._category_to_domain(row) for row in rows]

    def sample_brands(self, limit: int) -> list[str]:
        statement = (
            select(ListingRow.brand)
            .where(ListingRow.status == ACTIVE_STATUS)
            .where(ListingRow.brand.is_not(None))
            .limit(limit)
        )
        return list(self._read(statement, lambda result: result.scalars().all()))

    def _read(self, statement: Any, consume: Callable[[Result[Any]], T]) -> T:
        """Execute inside a SAVEPOINT and translate ORM/driver errors."""
        try:
            with self._session.begin_nested():
                return consume(self._session.execute(statement))
        except SQLAlchemyError as exc:
            raise DatastoreError(str(exc)) from exc

    def _build_select(self, query: ListingQuery) -> Select[tuple[ListingRow]]:
        """
        Build the page query: predicates plus ordering, no paging.

        Seller and category are eager-loaded through the relationships'
        joined loading strategy.
        """
        return (
            select(ListingRow)
            .where(*self._where(query.predicates))
            .order_by(self._order_by(query.ordering))
        )

    def _where(self, predicates: tuple[Predicate, ...]) -> list[ColumnElement[bool]]:
        return [self._clause(predicate) for predicate in predicates]

    def _clause(self, predicate: Predicate) -> ColumnElement[bool]:
        if isinstance(predicate, Equals):
            return _LISTING_COLUMNS[predicate.field] == self._bind(predicate.field, predicate.value)
        if isinstance(predicate, AtLeast):
            return _LISTING_COLUMNS[predicate.field] >= predicate.value
        if isinstance(predicate, AtMost):
            return _LISTING_COLUMNS[predicate.field] <= predicate.value
        if isinstance(predicate, OneOf):
            return _LISTING_COLUMNS[predicate.field].in_(predicate.values)
        if isinstance(predicate, TextMatch):
            return self._text_clause(predicate)
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def _text_clause(self, predicate: TextMatch) -> ColumnElement[bool]:
        """Full-text OR substring, in a single OR group."""
        alternatives: list[ColumnElement[bool]] = []

        if predicate.terms:
            config = cast(literal(self._text_search_config), REGCONFIG)
            tsquery = func.to_tsquery(config, " | ".join(predicate.terms))
            for field in predicate.full_text_fields:
                document = func.to_tsvector(config, _LISTING_COLUMNS[field])
                alternatives.append(document.bool_op("@@")(tsquery))

        pattern = contains_pattern(predicate.phrase)
        for field in predicate.substring_fields:
            alternatives.append(_LISTING_COLUMNS[field].ilike(pattern, escape=LIKE_ESCAPE))

        return or_(*alternatives)

    def _order_by(self, ordering: Ordering) -> ColumnElement[Any]:
        column = _LISTING_COLUMNS[ordering.field]
        return column.desc() if ordering.descending else column.asc()

    def _bind(self, field: str, value: Any) -> Any:
        if field in _UUID_FIELDS and not isinstance(value, uuid.UUID):
            return uuid.UUID(str(value))
        return value

    def _to_domain(self, row: ListingRow) -> Listing:
        """
        Convert database model (ListingRow) to domain entity (Listing).

        Args:
            row: SQLAlchemy ListingRow model with seller/category loaded

        Returns:
            Listing domain entity
        """
        seller = None
        if row.seller is not None:
            seller = Seller(
                id=str(row.seller.id),
                username=row.seller.username,
                full_name=row.seller.full_name,
                avatar_url=row.seller.avatar_url,
                is_verified=bool(row.seller.is_verified),
            )

        category = None
        if row.category is not None:
            category = ListingCategory(
                id=str(row.category.id),
                name=row.category.name,
                slug=row.category.slug,
                icon_url=row.category.icon_url,
            )

        return Listing(
            id=str(row.id),
            title=row.title,
            description=row.description,
            price=row.price,  # Already Decimal from NUMERIC column
            created_at=row.created_at,
            currency=row.currency,
            status=row.status,
            category_id=str(row.category_id) if row.category_id else None,
            subcategory_id=str(row.subcategory_id) if row.subcategory_id else None,
            brand=row.brand,
            size=row.size,
            condition=row.condition,
            images=tuple(row.images or ()),
            location=row.location,
            view_count=row.view_count or 0,
            like_count=row.like_count or 0,
            is_negotiable=bool(row.is_negotiable),
            shipping_included=bool(row.shipping_included),
            shipping_cost=row.shipping_cost,
            seller=seller,
            category=category,
        )

    def _category_to_domain(self, row: CategoryRow) -> Category:
        return Category(
            id=str(row.id),
            name=row.name,
            slug=row.slug,
            icon_url=row.icon_url,
            parent_id=str(row.parent_id) if row.parent_id else None,
            sort_order=row.sort_order or 0,
            is_active=bool(row.is_active),
        )
