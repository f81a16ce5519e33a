"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy import Engine
from starlette.middleware.base import BaseHTTPMiddleware

from tables_service.api.http.app_data import ApplicationDependencies
from tables_service.api.http.problems import problem_response, register_problem_handlers
from tables_service.api.http.routers import health
from tables_service.api.http.routers.tables import TableApi
from tables_service.api.utils.app_startup import configure_logging
from tables_service.core.services import (
    DbSessionService,
    JWKSCacheInMemory,
    JwksService,
    JwtVerificationService,
    TableService,
)
from tables_service.runtime.config.config_data import ConfigData
from tables_service.runtime.context import get_config


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, environment: str):
        super().__init__(app)
        self._environment = environment

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        if self._environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )
        return response


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return problem_response(
                500,
                headers={"X-Request-ID": request_id},
                requestId=request_id,
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


def build_dependencies(
    config: ConfigData, engine: Engine | None = None
) -> ApplicationDependencies:
    """Construct the process-wide services once, in dependency order."""
    database_service = DbSessionService(config, engine=engine)
    jwks_service = JwksService(JWKSCacheInMemory(ttl_seconds=config.jwt.jwks_cache_ttl))
    return ApplicationDependencies(
        config=config,
        database_service=database_service,
        jwks_service=jwks_service,
        jwt_verify_service=JwtVerificationService(config, jwks_service),
        table_service=TableService(database_service),
    )


def create_app(
    config: ConfigData | None = None,
    dependencies: ApplicationDependencies | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration to run with; defaults to the active context's
        dependencies: Pre-built services; built from ``config`` when omitted

    Returns:
        The configured application
    """
    if config is None:
        config = dependencies.config if dependencies is not None else get_config()
    configure_logging(config)
    deps = dependencies or build_dependencies(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up application in {} environment", config.app.environment)
        if config.database.create_tables:
            deps.database_service.create_all()
        try:
            yield
        finally:
            logger.info("Shutting down application")
            deps.database_service.dispose()

    is_production = config.app.environment == "production"
    app = FastAPI(
        title="Tables Service",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    app.state.app_dependencies = deps

    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(SecurityHeadersMiddleware, environment=config.app.environment)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    register_problem_handlers(app)

    app.include_router(health.router)
    table_api = TableApi(
        deps.table_service,
        pagination=config.pagination,
        security=config.security,
    )
    app.include_router(table_api.router)

    return app
