"""Dashboard route — serves the operator UI."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ccdash.config import settings

router = APIRouter(tags=["dashboard"])
templates = Jinja2Templates(directory=str(settings.templates_path))


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request):
    """Service browser and configuration editor."""
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"refresh_ms": settings.refresh_interval_seconds * 1000},
    )
