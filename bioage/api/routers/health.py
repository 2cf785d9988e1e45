"""Health endpoint router composition for app and workflow checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bioage.config import AppSettings
from bioage.jobs import WorkflowController


def api_create_health_router(settings: AppSettings, controller: WorkflowController) -> APIRouter:
    """Create health-check router reporting app, backend target and workflow status.

    Args:
        settings: Validated runtime settings.
        controller: Workflow controller to report on.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if controller is None:
        raise ValueError("controller must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        payload = {
            "status": "ok",
            "app": "up",
            "backend": settings.backend_base_url,
            "protocol_profile": settings.protocol_profile.value,
            "workflow": controller.state.status.value,
            "busy": controller.workflow_is_busy(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
