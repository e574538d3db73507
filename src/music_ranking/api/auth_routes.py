"""Authentication routes: login, logout, current admin, token refresh."""

from fastapi import APIRouter

from music_ranking import auth
from music_ranking.api.deps import CurrentAdmin, DbSession
from music_ranking.api.schemas import LoginRequest, ok, user_data

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
async def login(body: LoginRequest, session: DbSession) -> dict:
    """Exchange email/password for a bearer token."""
    user, token = await auth.authenticate(session, body.email, body.password)
    return ok(
        message="Login realizado com sucesso.",
        data={"user": user_data(user), "token": token},
    )


@router.post("/logout")
async def logout(current: CurrentAdmin, session: DbSession) -> dict:
    """Revoke the token used for this request."""
    await auth.logout(session, current.token)
    return ok(message="Logout realizado com sucesso.")


@router.get("/me")
async def me(current: CurrentAdmin) -> dict:
    return ok(data=user_data(current.user))


@router.post("/refresh")
async def refresh(current: CurrentAdmin, session: DbSession) -> dict:
    """Replace the current token with a new one."""
    token = await auth.refresh_token(session, current.user, current.token)
    return ok(
        message="Token renovado com sucesso.",
        data={"token": token, "user": user_data(current.user)},
    )
