"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from spoonacular_proxy.api.cache import router as cache_router
from spoonacular_proxy.api.ingredients import router as ingredients_router
from spoonacular_proxy.api.recipes import router as recipes_router
from spoonacular_proxy.app_logging import configure_logging
from spoonacular_proxy.containers import AppContainer
from spoonacular_proxy.errors import InputValidationError, OperationFailedError
from spoonacular_proxy.services.cache import InMemoryCache


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        interval = state_container.settings.cache_sweep_interval_seconds
        sweeper: asyncio.Task[None] | None = None
        if interval > 0:
            sweeper = asyncio.create_task(
                _sweep_expired(state_container.cache, interval)
            )
        yield
        if sweeper is not None:
            sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sweeper
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(recipes_router)
    app.include_router(ingredients_router)
    app.include_router(cache_router)

    @app.exception_handler(InputValidationError)
    async def input_validation_error(
        request: Request, exc: InputValidationError
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=400, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Malformed request %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": _describe(exc)},
        )

    @app.exception_handler(OperationFailedError)
    async def operation_failed_error(
        request: Request, exc: OperationFailedError
    ) -> JSONResponse:
        return JSONResponse(status_code=500, content=exc.to_body())

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Plain-text liveness banner."""
        return "Spoonacular API wrapper is running!"

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/debug")
    async def debug(request: Request) -> dict[str, object]:
        """Report whether an API key is configured, without revealing it."""
        settings = request.app.state.container.settings
        return {
            "hasSpoonacularKey": bool(settings.spoonacular_api_key),
            "keyLength": len(settings.spoonacular_api_key),
            "environment": settings.environment,
        }

    return app


async def _sweep_expired(cache: InMemoryCache, interval_seconds: float) -> None:
    logger = logging.getLogger(__name__)
    while True:
        await asyncio.sleep(interval_seconds)
        removed = cache.purge_expired()
        if removed:
            logger.debug("Swept %s expired cache entries", removed)


def _describe(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg', 'invalid')}")
    return "; ".join(messages)
