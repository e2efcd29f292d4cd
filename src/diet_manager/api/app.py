"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from diet_manager.api.admin import router as admin_router
from diet_manager.api.auth import router as auth_router
from diet_manager.api.foods import router as foods_router
from diet_manager.api.logs import router as logs_router
from diet_manager.api.plans import router as plans_router
from diet_manager.api.progress import router as progress_router
from diet_manager.api.responses import error_response
from diet_manager.app_logging import configure_logging
from diet_manager.config import parse_allowed_origins
from diet_manager.containers import AppContainer
from diet_manager.domain.errors import DietManagerError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = app.state.container.settings
        logger.info(
            "Diet manager API starting: environment=%s timezone=%s",
            settings.environment,
            settings.timezone,
        )
        yield
        logger.info("Diet manager API stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.client_url),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DietManagerError)
    async def handle_domain_error(
        request: Request, exc: DietManagerError
    ) -> JSONResponse:
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            location = ".".join(str(part) for part in errors[0].get("loc", ()))
            message = f"{location}: {errors[0].get('msg', message)}"
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Server error")

    app.include_router(auth_router)
    app.include_router(foods_router)
    app.include_router(plans_router)
    app.include_router(logs_router)
    app.include_router(progress_router)
    app.include_router(admin_router)

    @app.get("/api/health")
    async def health() -> dict[str, object]:
        """Simple health check endpoint."""
        return {"success": True, "message": "Diet manager API is running"}

    return app
