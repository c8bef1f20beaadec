"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contract_manager import __version__
from contract_manager.api.routes.calendar import router as calendar_router
from contract_manager.api.routes.contracts import router as contracts_router
from contract_manager.api.routes.cron import router as cron_router
from contract_manager.api.routes.events import router as events_router
from contract_manager.api.routes.health import router as health_router
from contract_manager.api.routes.team import router as team_router
from contract_manager.db.base import StoreError
from contract_manager.utils.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    worker = None
    if get_settings().enable_worker:
        from contract_manager.services.worker import get_worker
        worker = get_worker()
        await worker.start()
    yield
    if worker is not None:
        worker.stop()


async def _store_error_handler(request: Request, exc: StoreError):
    logger.error(f"Store error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Database error"})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Contract Manager API",
        description="Contract table, renewal calendar, team tasks and .ics export",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS: allow all, the auth proxy sits in front
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreError, _store_error_handler)

    app.include_router(health_router)
    app.include_router(contracts_router)
    app.include_router(calendar_router)
    app.include_router(events_router)
    app.include_router(team_router)
    app.include_router(cron_router)

    return app
