"""REST API error response models.

Documents the body produced by the exception handlers so it appears in the
OpenAPI schema.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "page",
                "message": "Input should be greater than or equal to 1",
                "code": "greater_than_equal",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Listings unavailable:
            {
                "detail": "Failed to load listings",
                "code": "INTERNAL_ERROR"
            }

        Validation error with field errors:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [{"field": "page", "message": "page must be >= 1"}]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Failed to load listings", "code": "INTERNAL_ERROR"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "page",
                            "message": "page must be >= 1",
                            "code": "INVALID_RANGE",
                        },
                    ],
                },
            ]
        }
    )
