from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tours_bridge.core.exceptions import APIException, UpstreamError
from tours_bridge.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


def error_envelope(status_code: int, message) -> dict:
    """The single error shape every endpoint returns."""
    return {"error": True, "status": status_code, "message": message}


async def handle_upstream_exception(request: Request, exc: UpstreamError) -> JSONResponse:
    """
    Handle provider failures.

    The context (request URL, original error) stays in the logs; the caller
    only sees the status and the provider's message.
    """
    logger.error(
        f"Upstream error: {exc.status_code}",
        extra={
            "request_path": request.url.path,
            "status_code": exc.status_code,
            "context": exc.context
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.warning(
        f"API Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "context": exc.context
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle framework errors such as unknown routes and disallowed methods."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"]}
        for error in exc.errors()
    ]
    logger.warning("Request validation error", extra={"errors": errors})

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, errors)
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred"
        )
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(UpstreamError, handle_upstream_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
