"""Async HTTP client for the ToolVault API."""
from toolvault.client.api_client import BookmarkClient, get_api_base_url, normalize_id
from toolvault.client.api_errors import ApiError, ParsedApiError, parse_http_error

__all__ = [
    "ApiError",
    "BookmarkClient",
    "ParsedApiError",
    "get_api_base_url",
    "normalize_id",
    "parse_http_error",
]
