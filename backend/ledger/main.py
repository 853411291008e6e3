"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledger.config import Settings, get_settings
from ledger.infrastructure.dependencies import build_ledger_context
from ledger.infrastructure.logging.log_config import setup_logging
from ledger.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — load the ledger, serve, then release the store."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    context = await build_ledger_context(settings)
    await context.start()
    app.state.ledger = context

    yield

    await context.stop()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Storage-Warning", "Content-Disposition"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ledger.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
