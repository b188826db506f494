"""HTTP client for the ToolVault bookmark API."""

import json
import logging
import os
from typing import Any
from uuid import UUID

import httpx

from toolvault.client.api_errors import ApiError, ParsedApiError, parse_http_error

logger = logging.getLogger(__name__)


def normalize_id(value: object) -> str:
    """Canonical text form of a bookmark id, so "ABC..." and "abc-..." compare equal."""
    try:
        return str(UUID(str(value)))
    except ValueError:
        return str(value)


def get_api_base_url() -> str:
    """Get the API base URL from environment."""
    return os.getenv("TOOLVAULT_API_URL", "http://localhost:3000")


class BookmarkClient:
    """
    Async client mirroring the calls the browser frontend makes.

    Keeps a local copy of the last fetched bookmark list. The copy is only a
    read cache for search and export; the server stays authoritative and the
    cache may be stale.

    Args:
        client: httpx client whose ``base_url`` points at the server root.
        token: Admin session token sent as ``Authorization: Bearer``.
        api_prefix: Path prefix the API is mounted under.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_prefix: str = "/api",
    ) -> None:
        self._client = client
        self.token = token
        self._prefix = api_prefix.rstrip("/")
        self._cache: list[dict[str, Any]] = []

    @property
    def cache(self) -> list[dict[str, Any]]:
        """Bookmarks from the last successful fetch, plus local mutations."""
        return list(self._cache)

    def _headers(self) -> dict[str, str]:
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body, raising ApiError on failure."""
        try:
            response = await self._client.request(
                method,
                f"{self._prefix}{path}",
                json=json_body,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise ApiError(ParsedApiError("internal", f"Request failed: {e}", None)) from e
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(parse_http_error(e)) from e
        return response.json()

    async def fetch_bookmarks(self) -> list[dict[str, Any]]:
        """
        Fetch all bookmarks and refresh the cache.

        On any failure, logs a warning and returns the last cached list instead
        of raising.
        """
        try:
            data = await self._request("GET", "/bookmarks")
        except (ApiError, ValueError) as e:
            logger.warning("Failed to fetch bookmarks, using cached list: %s", e)
            return self.cache

        self._cache = list(data)
        return self.cache

    async def create_bookmark(self, data: dict[str, Any]) -> dict[str, Any]:
        """Create a bookmark and add it to the cache."""
        created = await self._request("POST", "/bookmarks", data)
        self._cache.append(created)
        return created

    async def update_bookmark(self, bookmark_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Apply a partial update and replace the cached copy."""
        updated = await self._request("PUT", f"/bookmarks/{bookmark_id}", data)
        target = normalize_id(bookmark_id)
        self._cache = [
            updated if normalize_id(b.get("id")) == target else b for b in self._cache
        ]
        return updated

    async def delete_bookmark(self, bookmark_id: str) -> None:
        """Delete a bookmark and drop it from the cache."""
        await self._request("DELETE", f"/bookmarks/{bookmark_id}")
        target = normalize_id(bookmark_id)
        self._cache = [b for b in self._cache if normalize_id(b.get("id")) != target]

    async def login(self, email: str, password: str) -> str:
        """Log in as admin; the returned token is used for later calls."""
        data = await self._request("POST", "/login", {"email": email, "password": password})
        self.token = data["token"]
        return self.token

    async def logout(self) -> None:
        """End the current session and forget the token."""
        if self.token is not None:
            await self._request("POST", "/logout")
        self.token = None

    async def check_auth(self) -> bool:
        """Ask the server whether the current token is a live session."""
        data = await self._request("GET", "/auth/check")
        return bool(data.get("authenticated"))

    def search(self, query: str) -> list[dict[str, Any]]:
        """
        Filter cached bookmarks by name, case-insensitively.

        Never calls the server, so it's safe to run on every keystroke.
        """
        needle = query.strip().lower()
        if not needle:
            return self.cache
        return [b for b in self._cache if needle in str(b.get("name", "")).lower()]

    def export_json(self, bookmark_id: str | None = None) -> str:
        """Serialize one cached bookmark (as a one-item list) or all of them."""
        if bookmark_id is None:
            data = self._cache
        else:
            target = normalize_id(bookmark_id)
            data = [b for b in self._cache if normalize_id(b.get("id")) == target]
        return json.dumps(data, indent=2, ensure_ascii=False)
