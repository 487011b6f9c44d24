"""Mock dashboard backend speaking the same wire format as the real one."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_dashboard.config import (
    CONTENT_TYPE, DEBUG, HOST, OIDC_AUTHORIZATION_URL, PORT
)
from weather_dashboard.logging_config import configure_logging
from weather_dashboard.mock.endpoints import DashboardError, DashboardState, router

logger = logging.getLogger(__name__)

HTTP_ERROR_MESSAGES = {
    404: "API endpoint not found",
    405: "Method not allowed",
}


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build the {"error": {"code", "message"}} body used for every failure."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": status_code, "message": message}},
        media_type=CONTENT_TYPE
    )


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting mock weather dashboard backend")
    yield
    logger.info("Shutting down mock weather dashboard backend")


def create_app(oidc_authorization_url: str = OIDC_AUTHORIZATION_URL) -> FastAPI:
    """Create and configure the mock backend.

    Args:
        oidc_authorization_url: Identity provider URL handed out by
            GET /api/auth/login; empty means delegated sign-on is not configured

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Mock Weather Dashboard Backend",
        description="In-memory stand-in for the weather dashboard API",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.dashboard = DashboardState(oidc_authorization_url=oidc_authorization_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DashboardError)
    async def dashboard_error_handler(_request: Request, exc: DashboardError) -> JSONResponse:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Invalid request: {exc.errors()}")
        if any(error.get("loc", ("",))[0] == "body" for error in exc.errors()):
            return error_response(400, "Invalid JSON")
        return error_response(400, "Invalid request parameters")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return error_response(exc.status_code, message)

    app.include_router(router)

    return app


def main() -> None:
    """Run the mock backend with uvicorn."""
    configure_logging(logging.DEBUG if DEBUG else logging.INFO, server=True)
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        create_app(),
        host=HOST,
        port=PORT,
        log_config=None,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
