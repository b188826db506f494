"""Tests for admin login/logout/check endpoints and the mutation gate."""
from datetime import UTC, datetime, timedelta

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from toolvault.models.admin_session import AdminSession
from toolvault.models.bookmark import Bookmark
from toolvault.services.session_service import hash_token


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Login / logout / check
# =============================================================================


async def test_login_returns_token(auth_client: AsyncClient, db_session: AsyncSession) -> None:
    """Test that correct credentials yield a token stored only as a hash."""
    response = await auth_client.post(
        "/api/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["token"].startswith("tv_")
    assert datetime.fromisoformat(data["expires_at"]).tzinfo is not None

    result = await db_session.execute(select(AdminSession))
    stored = result.scalar_one()
    assert stored.token_hash == hash_token(data["token"])
    assert stored.token_hash != data["token"]


async def test_login_wrong_password(auth_client: AsyncClient) -> None:
    """Test that a wrong password is a 401."""
    response = await auth_client.post(
        "/api/login",
        json={"email": ADMIN_EMAIL, "password": "wrong"},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}


async def test_login_wrong_email(auth_client: AsyncClient) -> None:
    """Test that a wrong email is a 401."""
    response = await auth_client.post(
        "/api/login",
        json={"email": "someone@example.com", "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 401


async def test_login_missing_fields(auth_client: AsyncClient) -> None:
    """Test that missing credentials are a validation error."""
    response = await auth_client.post("/api/login", json={"email": ADMIN_EMAIL})
    assert response.status_code == 400


async def test_check_with_valid_token(auth_client: AsyncClient, admin_token: str) -> None:
    """Test that check returns true for a fresh login."""
    response = await auth_client.get("/api/auth/check", headers=_bearer(admin_token))
    assert response.status_code == 200
    assert response.json() == {"authenticated": True}


async def test_check_without_token(auth_client: AsyncClient) -> None:
    """Test that check returns false without a token (not an error)."""
    response = await auth_client.get("/api/auth/check")
    assert response.status_code == 200
    assert response.json() == {"authenticated": False}


async def test_check_with_unknown_token(auth_client: AsyncClient) -> None:
    """Test that check returns false for a token that was never issued."""
    response = await auth_client.get("/api/auth/check", headers=_bearer("tv_unknown"))
    assert response.json() == {"authenticated": False}


async def test_logout_invalidates_token(auth_client: AsyncClient, admin_token: str) -> None:
    """Test that after logout, check returns false."""
    response = await auth_client.post("/api/logout", headers=_bearer(admin_token))
    assert response.status_code == 200
    assert response.json() == {"message": "Logged out"}

    response = await auth_client.get("/api/auth/check", headers=_bearer(admin_token))
    assert response.json() == {"authenticated": False}


async def test_logout_unknown_token_is_idempotent(auth_client: AsyncClient) -> None:
    """Test that logging out an unknown token still succeeds."""
    response = await auth_client.post("/api/logout", headers=_bearer("tv_never_issued"))
    assert response.status_code == 200


async def test_logout_without_token(auth_client: AsyncClient) -> None:
    """Test that logout without a header succeeds."""
    response = await auth_client.post("/api/logout")
    assert response.status_code == 200


async def test_expired_session_fails_check(
    auth_client: AsyncClient,
    admin_token: str,
    db_session: AsyncSession,
) -> None:
    """Test that a session past its expiry no longer authenticates."""
    result = await db_session.execute(
        select(AdminSession).where(AdminSession.token_hash == hash_token(admin_token)),
    )
    admin_session = result.scalar_one()
    admin_session.expires_at = datetime.now(UTC) - timedelta(minutes=1)
    await db_session.flush()

    response = await auth_client.get("/api/auth/check", headers=_bearer(admin_token))
    assert response.json() == {"authenticated": False}

    response = await auth_client.post(
        "/api/bookmarks",
        json={"name": "X", "url": "http://x"},
        headers=_bearer(admin_token),
    )
    assert response.status_code == 401


# =============================================================================
# Gate
# =============================================================================


async def test_list_is_public_with_auth_enabled(auth_client: AsyncClient) -> None:
    """Test that listing needs no token."""
    response = await auth_client.get("/api/bookmarks")
    assert response.status_code == 200


async def test_create_without_token_is_rejected(
    auth_client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    """Test that create without a token is a 401 and persists nothing."""
    response = await auth_client.post(
        "/api/bookmarks",
        json={"name": "X", "url": "http://x"},
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}
    assert response.headers["www-authenticate"] == "Bearer"

    result = await db_session.execute(select(Bookmark))
    assert result.scalars().all() == []


async def test_create_with_invalid_token_is_rejected(auth_client: AsyncClient) -> None:
    """Test that create with an unknown token is a 401."""
    response = await auth_client.post(
        "/api/bookmarks",
        json={"name": "X", "url": "http://x"},
        headers=_bearer("tv_forged"),
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired session"}


async def test_create_with_token_succeeds(auth_client: AsyncClient, admin_token: str) -> None:
    """Test that create with a valid token is allowed."""
    response = await auth_client.post(
        "/api/bookmarks",
        json={"name": "X", "url": "http://x"},
        headers=_bearer(admin_token),
    )
    assert response.status_code == 201


async def test_update_and_delete_are_gated(
    auth_client: AsyncClient,
    admin_token: str,
) -> None:
    """Test that update and delete need a token too."""
    created = await auth_client.post(
        "/api/bookmarks",
        json={"name": "X", "url": "http://x"},
        headers=_bearer(admin_token),
    )
    bookmark_id = created.json()["id"]

    response = await auth_client.put(f"/api/bookmarks/{bookmark_id}", json={"name": "Y"})
    assert response.status_code == 401
    response = await auth_client.delete(f"/api/bookmarks/{bookmark_id}")
    assert response.status_code == 401

    response = await auth_client.put(
        f"/api/bookmarks/{bookmark_id}", json={"name": "Y"}, headers=_bearer(admin_token),
    )
    assert response.status_code == 200
    response = await auth_client.delete(
        f"/api/bookmarks/{bookmark_id}", headers=_bearer(admin_token),
    )
    assert response.status_code == 200


async def test_mutation_after_logout_is_rejected(
    auth_client: AsyncClient,
    admin_token: str,
) -> None:
    """Test that a logged-out token can no longer mutate."""
    await auth_client.post("/api/logout", headers=_bearer(admin_token))

    response = await auth_client.post(
        "/api/bookmarks",
        json={"name": "X", "url": "http://x"},
        headers=_bearer(admin_token),
    )
    assert response.status_code == 401


# =============================================================================
# Auth disabled
# =============================================================================


async def test_auth_routes_absent_when_disabled(client: AsyncClient) -> None:
    """Test that login/logout/check aren't mounted without AUTH_ENABLED."""
    response = await client.post(
        "/api/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 404
    assert (await client.get("/api/auth/check")).status_code == 404


async def test_mutations_open_when_disabled(client: AsyncClient) -> None:
    """Test that create needs no token when auth is disabled."""
    response = await client.post("/api/bookmarks", json={"name": "X", "url": "http://x"})
    assert response.status_code == 201
