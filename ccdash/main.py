"""CCentral Dashboard — FastAPI Application."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from ccdash.config import settings
from ccdash.routes import api, dashboard
from ccdash.services.backend import BackendClient
from ccdash.services.refresh import RefreshOrchestrator

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    scheduler = AsyncIOScheduler()
    backend = BackendClient()
    app.state.orchestrator = RefreshOrchestrator(backend, scheduler)
    scheduler.start()
    logger.info("[INIT] Polling %s every %ss once a service is selected",
                settings.backend_url, settings.refresh_interval_seconds)

    yield

    app.state.orchestrator.stop()
    scheduler.shutdown(wait=False)
    await backend.aclose()
    logger.info("[SHUTDOWN] Scheduler stopped")


app = FastAPI(
    title="CCentral Dashboard",
    description="Browse services, inspect connected instances and edit configuration",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.include_router(api.router)
app.include_router(dashboard.router)


@app.get("/")
async def root():
    """Root endpoint — redirect to dashboard."""
    return RedirectResponse(url="/dashboard")


@app.get("/health")
async def health():
    """Health check with polling diagnostics."""
    orchestrator: RefreshOrchestrator = app.state.orchestrator
    return {
        "status": "ok",
        "service": "ccentral-dashboard",
        "version": APP_VERSION,
        "timestamp": datetime.now().isoformat(),
        "auth_enabled": bool(settings.api_key),
        "backend_url": settings.backend_url,
        "polling": {
            "selected_service": orchestrator.state.selected_service,
            "active": orchestrator.polling,
            "interval_seconds": orchestrator.interval_seconds,
            "scheduler_running": bool(orchestrator.scheduler and orchestrator.scheduler.running),
        },
    }


def main():
    import uvicorn

    uvicorn.run("ccdash.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
