"""REST API error response models.

Documented in the OpenAPI schema of every credit route; the exception
handlers produce bodies of this shape.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One field-level error inside a validation error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "vehicle_price",
                "message": "Must be a valid decimal: 12,000",
                "code": "INVALID_DECIMAL",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response.

    Simple errors carry ``detail`` and ``code``; validation errors may add an
    ``errors`` array with one entry per offending field.
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Bank with identifier '42' not found", "code": "NOT_FOUND"},
                {
                    "detail": "down_payment_amount must be < vehicle_price",
                    "code": "VALIDATION_ERROR",
                },
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "vehicle_price",
                            "message": "Must be a valid decimal: abc",
                            "code": "INVALID_DECIMAL",
                        }
                    ],
                },
            ]
        }
    )


ERROR_RESPONSES: dict[int | str, dict] = {
    404: {"model": ErrorResponse, "description": "Bank not found"},
    422: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Unexpected error"},
}
