"""
FastAPI application factory with middleware, CORS, and request tracing.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from infracascade.config import get_settings
from infracascade.engine import get_cascade_context
from infracascade.routers import cascades, system
from infracascade.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

# Track startup time for uptime calculation
_startup_time = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Warms the dependency graph cache on startup.
    """
    settings = get_settings()

    logger.info(
        "application_startup",
        version=app.version,
        dev_mode=settings.dev_mode,
        data_dir=str(settings.resolved_data_dir),
    )

    stats = get_cascade_context().graph_stats()
    logger.info("graph_warmed", nodes=stats.nodes, edges=stats.edges)

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """
    Application factory.
    Creates and configures FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Infrastructure Cascade API",
        description="Dependency cascade analysis for cables, pipelines, ports and chokepoints",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def request_tracing_middleware(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id

            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )

            return response
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "error": "Internal server error",
                    "request_id": request_id,
                },
                headers={"X-Request-ID": request_id},
            )

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "success": True,
            "data": {
                "status": "healthy",
                "version": app.version,
                "uptime_seconds": round(time.time() - _startup_time, 1),
            },
        }

    app.include_router(cascades.router, prefix="/api/v1/cascades", tags=["Cascades"])
    app.include_router(system.router, prefix="/api/v1/system", tags=["System"])

    logger.info("application_configured", routers_count=2)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "infracascade.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
