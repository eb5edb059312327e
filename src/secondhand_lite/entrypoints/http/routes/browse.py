import logging
from typing import Any, Callable, Coroutine

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from secondhand_lite.domain.errors import ValidationError
from secondhand_lite.domain.filters import BrowseFilters
from secondhand_lite.entrypoints.http.dependencies import (
    get_browse_listings_use_case,
    get_load_more_listings_use_case,
)
from secondhand_lite.entrypoints.http.dtos.browse import (
    BrowseQueryDTO,
    BrowseResponseDTO,
    LoadMoreResponseDTO,
)
from secondhand_lite.entrypoints.http.error_responses import ErrorResponse
from secondhand_lite.entrypoints.http.mappers.browse_mapper import BrowseMapper
from secondhand_lite.use_cases.browse_listings import BrowseListings
from secondhand_lite.use_cases.load_more_listings import LoadMoreListings
from secondhand_lite.use_cases.result_assembler import failed_load_more_result

logger = logging.getLogger(__name__)


class LoadMoreRoute(APIRoute):
    """
    Route whose unexpected failures, including those raised while resolving
    dependencies, answer with the load-more body flagged ``failed``.

    Validation errors keep their usual 422 handling.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def handle_with_failure_flag(request: Request) -> Response:
            try:
                return await handler(request)
            except (HTTPException, RequestValidationError, ValidationError):
                raise
            except Exception as exc:
                logger.error(
                    "Load more request failed",
                    exc_info=exc,
                    extra={
                        "error_type": type(exc).__name__,
                        "path": request.url.path,
                        "method": request.method,
                    },
                )
                return failed_load_more_response(request)

        return handle_with_failure_flag


def failed_load_more_response(request: Request) -> JSONResponse:
    paging = BrowseFilters.from_query_params(request.query_params).paging
    body = BrowseMapper.to_load_more_response(failed_load_more_result(paging))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(mode="json"),
    )


router = APIRouter(tags=["Browse"])
load_more_router = APIRouter(tags=["Browse"], route_class=LoadMoreRoute)

BROWSE_DESCRIPTION = """
Search active listings with optional filters, sorting and pagination.

## Filters
- All filters use AND semantics
- `q`: full-text match on title/description (any word) OR substring match
  on brand/title/description
- `category` / `subcategory`: slug or part of the name; unknown or ambiguous
  values are ignored rather than returning an empty page
- `min_price` / `max_price`: inclusive; malformed values are ignored
- `sizes`, `brands`, `conditions`: comma-separated lists; empty means no filter

## Sorting
`recent` (default), `price-low`, `price-high`, `popular` (views), `liked`

## Pagination
- `page` starts at 1, `limit` defaults to 24 (max 100)
- `total_count` is counted independently of the page window

## Example
```
GET /v1/browse?q=denim%20jacket&max_price=100&sizes=M&sort=price-low
```
"""


@router.get(
    "/browse",
    response_model=BrowseResponseDTO,
    summary="Browse listings",
    description=BROWSE_DESCRIPTION,
    responses={
        500: {"model": ErrorResponse, "description": "Listings could not be loaded"},
    },
)
def browse_listings(
    query: BrowseQueryDTO = Depends(),
    use_case: BrowseListings = Depends(get_browse_listings_use_case),
) -> BrowseResponseDTO:
    """Browse endpoint following parse -> execute -> map -> return pattern."""
    request = BrowseMapper.to_browse_request(query)
    result = use_case.execute(request)
    return BrowseMapper.to_response(result)


@load_more_router.get(
    "/browse/load-more",
    response_model=LoadMoreResponseDTO,
    summary="Load the next page of browse results",
    description="""
    Incremental page for infinite scroll. Accepts the same parameters as
    `/browse` and returns only listings, `has_more` and `page`.

    `has_more` is true when the page came back full (`limit` rows).

    On failure the response is HTTP 500 with an empty listing array and
    `failed: true`, so the client can stop paginating.
    """,
)
def load_more_listings(
    response: Response,
    query: BrowseQueryDTO = Depends(),
    use_case: LoadMoreListings = Depends(get_load_more_listings_use_case),
) -> LoadMoreResponseDTO:
    request = BrowseMapper.to_load_more_request(query)
    result = use_case.execute(request)

    if result.failed:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return BrowseMapper.to_load_more_response(result)


# Included before /browse/{category} so load-more is not captured as a category
router.include_router(load_more_router)


@router.get(
    "/browse/{category}",
    response_model=BrowseResponseDTO,
    summary="Browse a category",
    description="Same as `/browse` with the path segment used as the `category` filter.",
)
def browse_category(
    category: str,
    query: BrowseQueryDTO = Depends(),
    use_case: BrowseListings = Depends(get_browse_listings_use_case),
) -> BrowseResponseDTO:
    request = BrowseMapper.to_browse_request(query, category=category)
    return BrowseMapper.to_response(use_case.execute(request))


@router.get(
    "/browse/{category}/{subcategory}",
    response_model=BrowseResponseDTO,
    summary="Browse a subcategory",
    description=(
        "Same as `/browse` with the path segments used as the `category` and "
        "`subcategory` filters."
    ),
)
def browse_subcategory(
    category: str,
    subcategory: str,
    query: BrowseQueryDTO = Depends(),
    use_case: BrowseListings = Depends(get_browse_listings_use_case),
) -> BrowseResponseDTO:
    request = BrowseMapper.to_browse_request(query, category=category, subcategory=subcategory)
    return BrowseMapper.to_response(use_case.execute(request))
