"""Dashboard JSON API — consumed by the dashboard page."""

from fastapi import APIRouter, Depends, HTTPException, Request

from ccdash.models.schemas import DashboardView, FieldUpdateRequest, FieldView
from ccdash.services.auth import require_api_key
from ccdash.services.backend import BackendError
from ccdash.services.refresh import RefreshOrchestrator, UnknownField
from ccdash.services.views import build_view

router = APIRouter(prefix="/api", tags=["dashboard-api"])


def get_orchestrator(request: Request) -> RefreshOrchestrator:
    return request.app.state.orchestrator


def _field_view(orchestrator: RefreshOrchestrator, key: str) -> FieldView:
    view = build_view(orchestrator.state)
    return next(f for f in view.fields if f.key == key)


@router.get("/services")
async def list_services(orchestrator: RefreshOrchestrator = Depends(get_orchestrator)):
    """Reload the list of registered services from the backend."""
    services = await orchestrator.load_services()
    return {"services": services}


@router.post("/services/{service}/select", response_model=DashboardView)
async def select_service(
    service: str,
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
):
    """Select a service; derived state is reset and polling restarts."""
    await orchestrator.select_service(service)
    return build_view(orchestrator.state)


@router.get("/view", response_model=DashboardView)
async def get_view(orchestrator: RefreshOrchestrator = Depends(get_orchestrator)):
    """Current view of the selected service, as of the last refresh."""
    return build_view(orchestrator.state)


@router.patch("/fields/{key}", response_model=FieldView)
async def edit_field(
    key: str,
    request: FieldUpdateRequest,
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
):
    """Edit a field locally; it stays dirty until saved."""
    try:
        orchestrator.edit_field(key, request.value)
    except UnknownField:
        raise HTTPException(404, f"Unknown field {key}")
    except ValueError as e:
        raise HTTPException(400, str(e))
    return _field_view(orchestrator, key)


@router.put(
    "/fields/{key}",
    response_model=FieldView,
    dependencies=[Depends(require_api_key)],
)
async def save_field(
    key: str,
    request: FieldUpdateRequest,
    orchestrator: RefreshOrchestrator = Depends(get_orchestrator),
):
    """Set a field and push it to the backend."""
    try:
        orchestrator.edit_field(key, request.value)
        await orchestrator.save_field(key)
    except UnknownField:
        raise HTTPException(404, f"Unknown field {key}")
    except ValueError as e:
        raise HTTPException(400, str(e))
    except BackendError as e:
        raise HTTPException(502, f"Backend rejected save: {e}")
    return _field_view(orchestrator, key)
