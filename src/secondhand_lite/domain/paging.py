from __future__ import annotations

from dataclasses import dataclass

from secondhand_lite.domain.errors import PagingValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 24
MAX_LIMIT = 100


@dataclass(frozen=True, slots=True)
class Paging:
    """
    Page-number pagination.

    A page maps to the half-open row window [offset, offset + limit).
    No upper bound is enforced on page: a page past the end of the data
    yields zero rows.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def window(self) -> tuple[int, int]:
        return self.offset, self.offset + self.limit

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.limit < 1:
            raise PagingValidationError("limit must be >= 1")
        if self.limit > MAX_LIMIT:
            raise PagingValidationError(f"limit must be <= {MAX_LIMIT}")

    def has_more_after(self, rows_returned: int) -> bool:
        """
        Incremental-load heuristic: a further page is assumed to exist only
        when this page came back full.

        Avoids a count query on the load-more path. When the remaining rows
        are an exact multiple of limit, the last full page still reports
        True and the following request returns an empty page.
        """
        return rows_returned == self.limit


@dataclass(frozen=True, slots=True)
class PaginationInfo:
    current_page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
    limit: int

    @classmethod
    def from_total(cls, total_count: int, paging: Paging) -> PaginationInfo:
        """
        Derive page metadata from an independently computed total.

        totalPages is ceil(total_count / limit), which is 0 for an empty
        result; both navigation flags are then False.
        """
        if total_count <= 0:
            return cls(
                current_page=paging.page,
                total_pages=0,
                has_next_page=False,
                has_prev_page=False,
                limit=paging.limit,
            )

        total_pages = -(-total_count // paging.limit)
        return cls(
            current_page=paging.page,
            total_pages=total_pages,
            has_next_page=paging.page < total_pages,
            has_prev_page=paging.page > 1,
            limit=paging.limit,
        )
