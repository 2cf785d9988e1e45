"""FastAPI application factory for the workflow HTTP surface."""

from fastapi import FastAPI

from bioage.config import AppSettings
from bioage.jobs import WorkflowController
from bioage.notifications import InMemoryNotificationSink

from .routers import api_create_health_router, api_create_workflow_router


def create_api_application(
    settings: AppSettings,
    controller: WorkflowController,
    notification_sink: InMemoryNotificationSink,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        controller: Single-job workflow controller served by this app.
        notification_sink: In-memory sink the controller notifies.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="Biological Age Calculator")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        return {
            "service": "bioage-workflow",
            "status": "ready",
            "environment": settings.environment_name,
            "protocol_profile": settings.protocol_profile.value,
        }

    application.include_router(api_create_health_router(settings=settings, controller=controller))
    application.include_router(api_create_workflow_router(controller=controller, notification_sink=notification_sink))

    return application
