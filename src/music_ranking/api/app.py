"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from music_ranking.api import auth_routes
from music_ranking.api.routes import api_router, router
from music_ranking.api.schemas import fail
from music_ranking.auth import InvalidCredentials
from music_ranking.config import get_settings
from music_ranking.db.session import engine
from music_ranking.ranking import InvalidAssignment, SongNotFound
from music_ranking.songs.service import DuplicateYoutubeUrl, InvalidSongData
from music_ranking.suggestions.service import InvalidSuggestion

logger = logging.getLogger(__name__)

# Domain errors reported to the client as 422 with their own message
UNPROCESSABLE_ERRORS = (
    InvalidAssignment,
    InvalidSongData,
    InvalidSuggestion,
    DuplicateYoutubeUrl,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: release pooled connections on shutdown."""
    settings = get_settings()
    logger.info(f"Starting in {settings.ENV} mode")

    yield

    await engine.dispose()


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        fail(str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Group validation messages per field, skipping the body/query prefix."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"][1:]] or [str(error["loc"][0])]
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(".".join(loc), []).append(message)
    return JSONResponse(fail("Dados inválidos.", errors), status_code=422)


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info(f"[API] {request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(fail(str(exc)), status_code=422)


async def not_found_handler(request: Request, exc: SongNotFound) -> JSONResponse:
    return JSONResponse(fail(str(exc)), status_code=404)


async def credentials_handler(request: Request, exc: InvalidCredentials) -> JSONResponse:
    return JSONResponse(
        fail("Credenciais inválidas.", {"email": [exc.message]}),
        status_code=422,
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"[API] Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(fail("Erro interno do servidor."), status_code=500)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Music Ranking",
        description="Top five song ranking with visitor suggestions",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    for error in UNPROCESSABLE_ERRORS:
        app.add_exception_handler(error, domain_error_handler)
    app.add_exception_handler(SongNotFound, not_found_handler)
    app.add_exception_handler(InvalidCredentials, credentials_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(router)
    app.include_router(api_router)
    app.include_router(auth_routes.router)

    return app
