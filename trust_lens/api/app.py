"""FastAPI application for the TrustLens rating service."""

import contextlib
import logging
import re
from typing import List, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..domain.errors import TrustLensError
from ..infrastructure.config import TrustLensConfig
from ..infrastructure.dependencies import (
    ServiceContainer,
    get_service_container,
    get_vote_aggregator,
)
from .endpoints import domains, health, ratings, stats

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _split_cors_origins(origins: List[str]) -> Tuple[List[str], Optional[str]]:
    exact = [o for o in origins if "*" not in o or o == "*"]
    patterns = [re.escape(o).replace(r"\*", ".*") for o in origins if "*" in o and o != "*"]
    return exact, "|".join(patterns) or None


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{field}: {first.get('msg')}" if field else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain errors into ``{"error": message}`` responses."""

    @app.exception_handler(TrustLensError)
    async def trust_lens_error_handler(request: Request, exc: TrustLensError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"❌ {request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
            return JSONResponse(status_code=500, content={"error": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    container: Optional[ServiceContainer] = None,
    config: Optional[TrustLensConfig] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        container: Services to serve (the global container is used lazily
            if omitted)
        config: Configuration; defaults to the container's or the
            environment's

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = container.config if container is not None else TrustLensConfig.from_env()
    _configure_logging(config.log_level)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for FastAPI application."""
        logger.info(f"🚀 TrustLens API starting in {config.rating_mode} mode")

        yield  # Application runs here

        # Shutdown: release whichever container served requests
        if container is not None:
            await container.shutdown()
        elif get_service_container.cache_info().currsize:
            await get_service_container().shutdown()
            get_service_container.cache_clear()

    app = FastAPI(
        title="TrustLens API",
        description="Community reliability ratings for news domains",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Wildcard origins such as chrome-extension://* become a regex
    exact_origins, origin_regex = _split_cors_origins(config.allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=exact_origins,
        allow_origin_regex=origin_regex,
        allow_credentials=not config.allow_all_origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    if container is not None:
        app.dependency_overrides[get_vote_aggregator] = container.get_vote_aggregator

    # Include routers
    app.include_router(health.router)
    app.include_router(ratings.router)
    if config.rating_mode == "vote":
        app.include_router(ratings.vote_router)
    else:
        app.include_router(ratings.set_router)
    app.include_router(domains.router)
    app.include_router(stats.router)

    return app
