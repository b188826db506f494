"""
API error parsing for the bookmark client.

Turns ``httpx.HTTPStatusError`` responses from the ToolVault API into a
semantic category plus the server's ``{"error": ...}`` message, so callers can
show a short notification without inspecting status codes.
"""

from dataclasses import dataclass
from typing import Literal

import httpx

ErrorCategory = Literal[
    "validation",          # 400 - Missing or malformed input
    "auth",                # 401 - Bad credentials or missing/expired session
    "not_found",           # 404 - No bookmark with that id, or unknown route
    "method_not_allowed",  # 405 - Verb not supported on this path
    "internal",            # 5xx or transport failures
]


@dataclass
class ParsedApiError:
    """Parsed API error with semantic category and message."""

    category: ErrorCategory
    message: str
    status_code: int | None  # None when no response arrived


class ApiError(Exception):
    """Raised by the client when a mutating call fails."""

    def __init__(self, parsed: ParsedApiError) -> None:
        self.category = parsed.category
        self.status_code = parsed.status_code
        super().__init__(parsed.message)


def parse_http_error(e: httpx.HTTPStatusError) -> ParsedApiError:
    """
    Parse HTTP error into semantic categories.

    Args:
        e: The HTTP status error from httpx

    Returns:
        ParsedApiError with category, message, and the response status
    """
    status = e.response.status_code
    server_message = _safe_get_error(e)

    if status == 400:
        return ParsedApiError("validation", server_message or "Validation error", status)
    if status == 401:
        return ParsedApiError("auth", server_message or "Not authenticated", status)
    if status == 404:
        return ParsedApiError("not_found", server_message or "Not found", status)
    if status == 405:
        return ParsedApiError("method_not_allowed", server_message or "Method not allowed", status)

    # Generic error for other status codes
    return ParsedApiError("internal", server_message or f"API error {status}", status)


def _safe_get_error(e: httpx.HTTPStatusError) -> str:
    """Safely extract the ``error`` message from an error response body."""
    try:
        body = e.response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        error = body.get("error", "")
        return error if isinstance(error, str) else str(error)
    # Non-dict JSON body (list, string, etc.) - no message
    return ""
