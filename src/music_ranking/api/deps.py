"""FastAPI dependencies: database session and bearer-token admin."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from music_ranking.auth import resolve_token
from music_ranking.db.models import AccessToken, User
from music_ranking.db.session import get_db

bearer_scheme = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


@dataclass
class AuthContext:
    """Authenticated admin and the token used for this request."""

    user: User
    token: AccessToken


async def get_current_admin(
    session: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthContext:
    """Resolve the bearer token or fail with 401."""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthenticated.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    resolved = await resolve_token(session, credentials.credentials)
    if resolved is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthenticated.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user, token = resolved
    return AuthContext(user=user, token=token)


CurrentAdmin = Annotated[AuthContext, Depends(get_current_admin)]
