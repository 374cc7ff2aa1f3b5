import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable, Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from tours_bridge.adapters.implementations.bokun import ActivityNormalizer, BokunConnector
from tours_bridge.api.error_handlers import register_exception_handlers
from tours_bridge.core.config import Settings, get_settings, load_env_file
from tours_bridge.core.logging import configure_logging, get_logger, set_correlation_id
from tours_bridge.infrastructure.auth import CredentialResolver
from tours_bridge.services.tour_service import TourService


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; defaults to the process settings
        transport: Optional httpx transport for the provider client

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up Tours Bridge")

        # ConfigurationError is not caught: without credentials the app must not start.
        credentials = CredentialResolver.from_settings(settings).resolve()

        connector = BokunConnector(
            base_url=settings.BOKUN_API_BASE,
            headers=credentials.headers,
            timeout=settings.UPSTREAM_TIMEOUT,
            transport=transport,
        )
        app.state.tour_service = TourService(
            connector=connector,
            normalizer=ActivityNormalizer(url_prefix=settings.TOUR_URL_PREFIX),
            settings=settings,
        )

        try:
            yield
        finally:
            logger.info("Shutting down Tours Bridge")
            await connector.aclose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=None,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    configure_middleware(app, settings)
    register_exception_handlers(app)
    register_routers(app, settings)

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    # Request tracking middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = set_correlation_id(
            request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        )

        start_time = time.time()

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request failed: {str(e)}",
                extra={
                    "request_path": request.url.path,
                    "method": request.method,
                    "process_time_ms": round(process_time * 1000, 2),
                },
                exc_info=True
            )
            raise

        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )

        return response


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Import routers here to avoid circular imports
    from tours_bridge.api.routes.health import health_router
    from tours_bridge.api.routes.tours import tours_router

    app.include_router(
        health_router,
        prefix=f"{settings.API_PREFIX}/health",
        tags=["Health"]
    )

    app.include_router(
        tours_router,
        prefix=f"{settings.API_PREFIX}/tours",
        tags=["Tours"]
    )


app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("tours_bridge.main:app", host=settings.HOST, port=settings.PORT)
