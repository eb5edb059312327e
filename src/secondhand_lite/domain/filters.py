from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, InvalidOperation
from enum import Enum
from typing import Mapping

from secondhand_lite.domain.paging import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, Paging

# Listing prices are NUMERIC(10, 2)
MAX_PRICE = Decimal("99999999.99")
CENT = Decimal("0.01")


class SortOption(str, Enum):
    RECENT = "recent"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    POPULAR = "popular"
    LIKED = "liked"

    @classmethod
    def parse(cls, raw: str | None) -> SortOption:
        """Unknown or missing values fall back to RECENT."""
        try:
            return cls((raw or "").strip())
        except ValueError:
            return cls.RECENT


@dataclass(frozen=True, slots=True)
class BrowseFilters:
    """
    Normalized browse criteria, parsed once per request.

    List fields hold unique values in first-seen order; an empty tuple means
    "no restriction", never "match nothing". min_price <= max_price is not
    enforced here.
    """

    category: str | None = None
    subcategory: str | None = None
    search: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sizes: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    conditions: tuple[str, ...] = ()
    sort_by: SortOption = SortOption.RECENT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def paging(self) -> Paging:
        return Paging(page=self.page, limit=self.limit)

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> BrowseFilters:
        """
        Build filters from raw query-string values.

        Unknown keys are ignored and malformed values degrade to their unset
        or default form; parsing never fails.

        Args:
            params: Query-string keys mapped to their raw string values

        Returns:
            BrowseFilters with coerced and defaulted fields
        """
        return cls(
            category=_text(params.get("category")),
            subcategory=_text(params.get("subcategory")),
            search=_text(params.get("q")),
            min_price=_price(params.get("min_price"), ROUND_CEILING),
            max_price=_price(params.get("max_price"), ROUND_FLOOR),
            sizes=_csv(params.get("sizes")),
            brands=_csv(params.get("brands")),
            conditions=_csv(params.get("conditions")),
            sort_by=SortOption.parse(params.get("sort")),
            page=_positive_int(params.get("page"), DEFAULT_PAGE),
            limit=min(_positive_int(params.get("limit"), DEFAULT_LIMIT), MAX_LIMIT),
        )


def _text(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = raw.strip()
    return value or None


def _price(raw: str | None, rounding: str) -> Decimal | None:
    value = _text(raw)
    if value is None:
        return None
    try:
        price = Decimal(value)
    except InvalidOperation:
        return None
    # Decimal accepts "NaN" and "Infinity"
    if not price.is_finite() or abs(price) > MAX_PRICE:
        return None
    # Stored prices are whole cents; rounding toward the inside of the range
    # keeps the same matches
    if price.as_tuple().exponent < CENT.as_tuple().exponent:
        price = price.quantize(CENT, rounding=rounding)
    return price


def _csv(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    parts = (part.strip() for part in raw.split(","))
    return tuple(dict.fromkeys(part for part in parts if part))


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 1 else default
