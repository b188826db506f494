"""Service layer for admin session tokens."""
import hashlib
import hmac
import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from toolvault.core.config import Settings
from toolvault.models.admin_session import AdminSession
from toolvault.services.exceptions import AuthError

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "tv_"


def generate_token() -> tuple[str, str, str]:
    """
    Generate a secure session token.

    Returns:
        Tuple of (plaintext_token, token_hash, token_prefix).
        The plaintext should only be returned once, at login.
    """
    raw = secrets.token_urlsafe(32)
    plaintext = f"{TOKEN_PREFIX}{raw}"
    token_hash = hash_token(plaintext)
    token_prefix = plaintext[:12]  # "tv_" + first 9 chars of raw
    return plaintext, token_hash, token_prefix


def hash_token(token: str) -> str:
    """Hash a token for comparison against stored hashes."""
    return hashlib.sha256(token.encode()).hexdigest()


def credentials_match(settings: Settings, email: str, password: str) -> bool:
    """
    Compare submitted credentials with the configured admin pair.

    Both comparisons always run and use constant-time comparison, so response
    time doesn't reveal which field was wrong.
    """
    email_ok = hmac.compare_digest(email.encode(), settings.admin_email.encode())
    password_ok = hmac.compare_digest(password.encode(), settings.admin_password.encode())
    return email_ok and password_ok


async def create_session(
    db: AsyncSession,
    ttl_hours: int,
) -> tuple[AdminSession, str]:
    """
    Create a new admin session.

    Returns:
        Tuple of (AdminSession model, plaintext_token).

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    plaintext, token_hash, token_prefix = generate_token()
    admin_session = AdminSession(
        token_hash=token_hash,
        token_prefix=token_prefix,
        expires_at=datetime.now(UTC) + timedelta(hours=ttl_hours),
    )
    db.add(admin_session)
    await db.flush()
    await db.refresh(admin_session)
    return admin_session, plaintext


async def login(
    db: AsyncSession,
    settings: Settings,
    email: str,
    password: str,
) -> tuple[AdminSession, str]:
    """
    Start an admin session if the credentials match.

    Raises:
        AuthError: If the email or password is wrong.
    """
    if not credentials_match(settings, email, password):
        logger.warning("Failed admin login attempt")
        raise AuthError("Invalid email or password")

    admin_session, plaintext = await create_session(db, settings.session_ttl_hours)
    logger.info("Admin logged in (session %s)", admin_session.token_prefix)
    return admin_session, plaintext


async def validate_session(
    db: AsyncSession,
    plaintext_token: str,
) -> AdminSession | None:
    """
    Return the session for a plaintext token if it exists and hasn't expired.

    Hashes the input token before database lookup, so lookups never compare
    plaintext values.
    """
    result = await db.execute(
        select(AdminSession).where(AdminSession.token_hash == hash_token(plaintext_token)),
    )
    admin_session = result.scalar_one_or_none()

    if admin_session is None or admin_session.is_expired():
        return None
    return admin_session


async def revoke_session(db: AsyncSession, plaintext_token: str) -> bool:
    """
    Delete the session for a token.

    Unknown tokens are not an error. Returns True if a session was removed.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    result = await db.execute(
        delete(AdminSession).where(AdminSession.token_hash == hash_token(plaintext_token)),
    )
    return result.rowcount > 0


async def purge_expired_sessions(db: AsyncSession) -> int:
    """
    Delete every session whose expiry has passed.

    Returns:
        Number of sessions deleted.
    """
    # SQLite returns naive datetimes, which can't be evaluated in Python against
    # an aware "now", so skip in-session synchronization.
    result = await db.execute(
        delete(AdminSession)
        .where(AdminSession.expires_at <= datetime.now(UTC))
        .execution_options(synchronize_session=False),
    )
    return result.rowcount
