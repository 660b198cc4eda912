"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import openai
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from savr.api.foods import router as foods_router
from savr.api.journal import router as journal_router
from savr.api.pantry import router as pantry_router
from savr.api.profile import router as profile_router
from savr.api.recipes import router as recipes_router
from savr.app_logging import configure_logging
from savr.containers import AppContainer
from savr.domain.errors import (
    ConcurrentUpdateError,
    EmptyPantrySelectionError,
    InvalidMealError,
    InvalidProfileError,
    MealNotFoundError,
    PantryItemNotFoundError,
    ProductNotFoundError,
    ProfileNotFoundError,
    RecipeNotFoundError,
    SavrError,
)

_ERROR_STATUS: dict[type[SavrError], int] = {
    InvalidProfileError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidMealError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ProfileNotFoundError: status.HTTP_404_NOT_FOUND,
    MealNotFoundError: status.HTTP_404_NOT_FOUND,
    RecipeNotFoundError: status.HTTP_404_NOT_FOUND,
    PantryItemNotFoundError: status.HTTP_404_NOT_FOUND,
    ProductNotFoundError: status.HTTP_404_NOT_FOUND,
    EmptyPantrySelectionError: status.HTTP_400_BAD_REQUEST,
    ConcurrentUpdateError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Savr", lifespan=lifespan)
    app.state.container = container

    app.include_router(profile_router)
    app.include_router(journal_router)
    app.include_router(pantry_router)
    app.include_router(recipes_router)
    app.include_router(foods_router)

    @app.exception_handler(SavrError)
    async def handle_domain_error(_request: Request, exc: SavrError) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        if status_code == status.HTTP_409_CONFLICT:
            logger.warning("Write conflict: %s", exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.exception_handler(httpx.HTTPError)
    @app.exception_handler(openai.OpenAIError)
    @app.exception_handler(RuntimeError)
    async def handle_upstream_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Upstream failure on %s %s", request.method, request.url.path)
        detail = "Upstream service failed"
        if container.settings.environment == "local":
            detail = f"{detail} (debug: {type(exc).__name__}: {exc})"
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": detail}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
