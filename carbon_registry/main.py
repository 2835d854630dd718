"""
FastAPI application entry point with async lifespan.
"""
import logging
import uvicorn
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carbon_registry.core.config import get_settings
from carbon_registry.core.database import build_engine, build_session_factory, init_db, close_db
from carbon_registry.core.errors import LedgerError
from carbon_registry.core.ledger import CarbonLedger
from carbon_registry.core.log import configure_logging
from carbon_registry.routes import health, devices, credits, producers, events

settings = get_settings()
logger = logging.getLogger("carbon_registry.app")


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """Render a rejected ledger operation as its HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code}
    )


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build the application; ``database_url`` overrides the configured one."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Async lifespan manager for startup and shutdown."""
        # Startup
        configure_logging(settings.log_level)
        engine = build_engine(database_url or settings.database_url, echo=settings.debug)
        await init_db(engine)
        app.state.ledger = CarbonLedger(
            build_session_factory(engine),
            admin_address=settings.admin_address,
            token_name=settings.token_name,
            token_symbol=settings.token_symbol
        )
        logger.info("ledger ready (admin=%s)", settings.admin_address)
        yield
        # Shutdown
        await close_db(engine)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Carbon credit registry and marketplace backed by registered IoT devices",
        lifespan=lifespan
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify exact origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(LedgerError, ledger_error_handler)

    # Register routes
    app.include_router(health.router)
    app.include_router(devices.router)
    app.include_router(credits.router)
    app.include_router(producers.router)
    app.include_router(events.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health"
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point."""
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
