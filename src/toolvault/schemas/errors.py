"""Error response schema shared by every endpoint."""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response."""

    error: str


# OpenAPI documentation for the error statuses routes can return
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    401: {"model": ErrorResponse, "description": "Missing or invalid session"},
    404: {"model": ErrorResponse, "description": "Not found"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}
