"""Admin authentication with personal access tokens.

Plain tokens look like ``<token_id>|<secret>``. Only the keyed hash of
the secret is stored, so a leaked database does not leak usable tokens.
"""

import hmac
import logging
from datetime import timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from music_ranking.config import get_settings
from music_ranking.crypto import generate_token_secret, hash_password, hash_token, verify_password
from music_ranking.db.models import AccessToken, User, utcnow

logger = logging.getLogger(__name__)

TOKEN_NAME = "auth-token"


class InvalidCredentials(Exception):
    """Raised when email/password do not match an account."""

    def __init__(self, message: str = "The provided credentials are incorrect."):
        super().__init__(message)
        self.message = message


async def create_user(session: AsyncSession, name: str, email: str, password: str) -> User:
    user = User(name=name, email=email.lower(), password_hash=hash_password(password))
    session.add(user)
    await session.flush()
    return user


async def issue_token(session: AsyncSession, user: User, name: str = TOKEN_NAME) -> str:
    """Create an access token for the user and return its plain form."""
    settings = get_settings()
    secret = generate_token_secret()
    expires_at = None
    if settings.TOKEN_TTL_MINUTES:
        expires_at = utcnow() + timedelta(minutes=settings.TOKEN_TTL_MINUTES)

    token = AccessToken(
        user_id=user.id,
        name=name,
        token_hash=hash_token(secret),
        expires_at=expires_at,
    )
    session.add(token)
    await session.flush()
    return f"{token.id}|{secret}"


async def authenticate(session: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue a new token.

    Raises:
        InvalidCredentials: unknown email or wrong password
    """
    result = await session.execute(select(User).where(User.email == email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"[AUTH] Failed login for {email}")
        raise InvalidCredentials()

    token = await issue_token(session, user)
    logger.info(f"[AUTH] User id={user.id} logged in")
    return user, token


async def resolve_token(session: AsyncSession, plain_token: str) -> tuple[User, AccessToken] | None:
    """Find the user owning a plain token. Expired or unknown tokens give None."""
    token_id, sep, secret = plain_token.partition("|")
    if not sep or not token_id.isdigit() or not secret:
        return None

    token = await session.get(AccessToken, int(token_id))
    if token is None or not hmac.compare_digest(token.token_hash, hash_token(secret)):
        return None

    now = utcnow()
    if token.expires_at is not None:
        # SQLite drops tzinfo
        expires_at = token.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= now:
            return None

    user = await session.get(User, token.user_id)
    if user is None:
        return None

    token.last_used_at = now
    return user, token


async def logout(session: AsyncSession, token: AccessToken) -> None:
    await session.delete(token)
    await session.flush()


async def refresh_token(session: AsyncSession, user: User, current: AccessToken) -> str:
    """Issue a new token before revoking the current one."""
    new_token = await issue_token(session, user)
    await session.delete(current)
    await session.flush()
    return new_token
