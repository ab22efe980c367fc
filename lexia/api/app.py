# lexia/api/app.py
"""
FastAPI application factory.

Every LexiaError becomes {"error": message, ...extra} with its status code
and headers; request validation failures are 400s; anything else is a
logged 500 with a generic message.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lexia import __version__
from lexia.config.schema import LexiaConfig
from lexia.errors import LexiaError
from lexia.models.responses import HealthResponse
from lexia.models.sqlite_store import SQLiteStore
from lexia.tools.services import build_services

from .routes import draft, estratega

logger = logging.getLogger(__name__)


def create_app(
    config: LexiaConfig,
    store: SQLiteStore | None = None,
    resolver: Any = None,
    permissions: Any = None,
) -> FastAPI:
    """
    Build the HTTP app.

    Args:
        config: Loaded configuration
        store: Store to use (default: SQLite at the configured path)
        resolver: Model resolver (default: ModelResolver over config.providers)
        permissions: Case permission checker (default: CasePermissionChecker)
    """
    services = build_services(config, store=store, resolver=resolver, permissions=permissions)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await services.store.initialize()
        logger.info(f"Lexia API ready (db={services.store.db_path})")
        yield
        logger.info("Shutting down Lexia API")
        await services.close()

    app = FastAPI(title="Lexia", version=__version__, lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LexiaError)
    async def lexia_error_handler(request: Request, exc: LexiaError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            {"error": exc.message, **exc.extra()},
            status_code=exc.status_code,
            headers=exc.headers() or None,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = {
            ".".join(str(part) for part in err["loc"][1:]) or "body": err["msg"]
            for err in exc.errors()
        }
        return JSONResponse({"error": "Invalid request", "errors": errors}, status_code=400)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"{request.method} {request.url.path} crashed: {exc}", exc_info=exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)

    app.include_router(estratega.router)
    app.include_router(draft.router)

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(version=__version__)

    return app
