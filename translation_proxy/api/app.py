"""
FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from translation_proxy.api.middleware import setup_middleware
from translation_proxy.api.routes import (
    history_router, profile_router, system_router, translation_router
)
from translation_proxy.config.config import Environment, config
from translation_proxy.database.connection import close_database, init_database
from translation_proxy.services.inference_client import get_inference_client
from translation_proxy.utils.exceptions import TranslationProxyException, create_error_response
from translation_proxy.utils.logging import api_logger

ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "AUTHENTICATION_ERROR": status.HTTP_401_UNAUTHORIZED,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "UPSTREAM_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "PROBE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "DATABASE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CONFIGURATION_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    api_logger.info("Starting translation proxy service")

    try:
        await init_database()
        api_logger.info("Database initialized successfully")
    except Exception as e:
        api_logger.error(f"Failed to start service: {str(e)}", exc_info=True)
        raise

    yield

    api_logger.info("Shutting down translation proxy service")

    try:
        await get_inference_client().close()
        await close_database()
        api_logger.info("Translation proxy service shut down successfully")
    except Exception as e:
        api_logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", "unknown")


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    docs_enabled = config.environment != Environment.PRODUCTION

    app = FastAPI(
        title="Translation Proxy API",
        description="""
        Machine translation through hosted models, with per-user history,
        favorites and language preferences.

        ## Authentication

        History and profile endpoints require a bearer token from the session
        provider: `Authorization: Bearer <token>`. Translation works without
        one, but only authenticated translations are saved.
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    setup_middleware(app)

    app.include_router(translation_router)
    app.include_router(system_router)
    app.include_router(history_router)
    app.include_router(profile_router)

    @app.exception_handler(TranslationProxyException)
    async def translation_proxy_exception_handler(request: Request, exc: TranslationProxyException):
        """Handle custom translation proxy exceptions."""
        status_code = ERROR_STATUS_CODES.get(exc.error_code, status.HTTP_400_BAD_REQUEST)
        log = api_logger.error if status_code >= 500 else api_logger.warning
        log(
            f"Translation proxy exception: {exc.error_code} - {exc.message}",
            event="request_error",
            metadata={
                "error_code": exc.error_code,
                "path": request.url.path,
                "method": request.method,
                "correlation_id": _correlation_id(request)
            }
        )

        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(create_error_response(exc)),
            headers={"X-Correlation-ID": _correlation_id(request)}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        api_logger.warning(
            f"Request validation error: {str(exc)}",
            event="request_invalid",
            metadata={
                "path": request.url.path,
                "method": request.method,
                "correlation_id": _correlation_id(request)
            }
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Request validation failed",
                "code": "VALIDATION_ERROR",
                "details": jsonable_encoder(exc.errors())
            },
            headers={"X-Correlation-ID": _correlation_id(request)}
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions."""
        # Structured details are passed through unchanged
        if isinstance(exc.detail, dict):
            content = exc.detail
        else:
            content = {"error": exc.detail}

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers={
                **dict(exc.headers or {}),
                "X-Correlation-ID": _correlation_id(request)
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        api_logger.error(
            f"Unexpected error: {str(exc)}",
            event="unexpected_error",
            metadata={
                "path": request.url.path,
                "method": request.method,
                "correlation_id": _correlation_id(request)
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
            headers={"X-Correlation-ID": _correlation_id(request)}
        )

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Translation Proxy API",
            "version": "1.0.0",
            "status": "operational",
            "documentation": "/docs" if docs_enabled else None,
            "health_check": "/health"
        }

    return app


# Create the application instance
app = create_app()
