"""Tests for REST error response models."""

from secondhand_lite.entrypoints.http.error_responses import ErrorDetail, ErrorResponse


class TestErrorDetail:
    """Tests for ErrorDetail model."""

    def test_creates_error_detail_with_all_fields(self) -> None:
        """ErrorDetail can be created with field, message, and code."""
        detail = ErrorDetail(
            field="page",
            message="page must be >= 1",
            code="INVALID_RANGE",
        )

        assert detail.field == "page"
        assert detail.message == "page must be >= 1"
        assert detail.code == "INVALID_RANGE"

    def test_creates_error_detail_without_code(self) -> None:
        """ErrorDetail can be created without code (optional)."""
        detail = ErrorDetail(field="limit", message="limit must be <= 100")

        assert detail.field == "limit"
        assert detail.code is None

    def test_serializes_to_dict_without_code(self) -> None:
        """ErrorDetail serializes the code as None when absent."""
        detail = ErrorDetail(field="limit", message="limit must be >= 1")

        assert detail.model_dump() == {
            "field": "limit",
            "message": "limit must be >= 1",
            "code": None,
        }

    def test_serializes_to_json(self) -> None:
        detail = ErrorDetail(field="page", message="Input should be a valid integer", code="int_parsing")

        json_str = detail.model_dump_json()

        assert '"field":"page"' in json_str
        assert '"code":"int_parsing"' in json_str


class TestErrorResponse:
    """Tests for ErrorResponse model."""

    def test_creates_simple_error_response(self) -> None:
        """ErrorResponse can be created with just detail and code."""
        response = ErrorResponse(detail="Failed to load listings", code="INTERNAL_ERROR")

        assert response.detail == "Failed to load listings"
        assert response.code == "INTERNAL_ERROR"
        assert response.errors is None

    def test_creates_error_response_without_code(self) -> None:
        """ErrorResponse can be created without code (optional)."""
        response = ErrorResponse(detail="Something went wrong")

        assert response.code is None
        assert response.errors is None

    def test_serializes_validation_error_to_dict(self) -> None:
        """ErrorResponse serializes validation error with fields to dict."""
        errors = [ErrorDetail(field="limit", message="limit must be <= 100", code="INVALID_RANGE")]

        response = ErrorResponse(detail="Validation failed", code="VALIDATION_ERROR", errors=errors)

        assert response.model_dump() == {
            "detail": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": [
                {"field": "limit", "message": "limit must be <= 100", "code": "INVALID_RANGE"},
            ],
        }

    def test_parses_validation_error_from_dict(self) -> None:
        """ErrorResponse can be parsed from dict with errors."""
        data = {
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": [{"field": "page", "message": "Field required", "code": "missing"}],
        }

        response = ErrorResponse.model_validate(data)

        assert response.errors is not None
        assert response.errors[0].field == "page"
        assert response.errors[0].code == "missing"


class TestErrorResponseExamples:
    """Tests for ErrorResponse example schemas."""

    def test_has_json_schema_examples(self) -> None:
        """ErrorResponse has json_schema_extra with examples."""
        schema = ErrorResponse.model_json_schema()

        assert "examples" in schema
        assert isinstance(schema["examples"], list)
        assert len(schema["examples"]) >= 2

    def test_listings_unavailable_example_is_valid(self) -> None:
        schema = ErrorResponse.model_json_schema()

        response = ErrorResponse.model_validate(schema["examples"][0])

        assert response.detail == "Failed to load listings"
        assert response.code == "INTERNAL_ERROR"

    def test_validation_error_example_is_valid(self) -> None:
        """Validation error example matches model schema."""
        schema = ErrorResponse.model_json_schema()

        response = ErrorResponse.model_validate(schema["examples"][1])

        assert response.errors is not None
        assert len(response.errors) > 0


class TestErrorDetailExamples:
    """Tests for ErrorDetail example schemas."""

    def test_example_is_valid(self) -> None:
        """ErrorDetail example matches model schema."""
        schema = ErrorDetail.model_json_schema()

        detail = ErrorDetail.model_validate(schema["example"])

        assert detail.field == "page"
        assert detail.code is not None
