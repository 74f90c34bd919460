"""FastAPI entry-point exposing the example pipelines."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from syzygy.api.routes import router as pipelines_router
from syzygy.config import config
from syzygy.core.log import configure_logging
from syzygy.runtime import close_state_manager, get_state_manager


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    configure_logging(config.log_level, config.log_format)
    yield
    # Shutdown: release the durable state backend
    await close_state_manager(get_state_manager())


app = FastAPI(title="Syzygy Agent Orchestrator", lifespan=lifespan)
app.include_router(pipelines_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
