"""Workflow API router for submission, state, cancellation and notifications."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import JSONResponse

from bioage.aggregation import result_build_panels
from bioage.adapters import AnalysisServiceError
from bioage.domain import CandidateFile, Failed, Polling, Succeeded
from bioage.jobs import WorkflowBusyError, WorkflowController
from bioage.notifications import InMemoryNotificationSink
from bioage.validation import FileValidationError

logger = logging.getLogger(__name__)


def api_serialize_workflow_state(controller: WorkflowController) -> dict[str, object]:
    """Serialize the controller state into a JSON-safe payload.

    Args:
        controller: Workflow controller to inspect.

    Returns:
        dict[str, object]: Status, job id, result panels, failure and timeline.
    """

    state = controller.state
    payload: dict[str, object] = {
        "status": state.status.value,
        "protocol_profile": controller.config.protocol_profile.value,
        "job_id": None,
        "result": None,
        "failure": None,
        "timeline": controller.timeline,
    }
    if isinstance(state, Polling):
        payload["job_id"] = state.job.job_id
    elif isinstance(state, Succeeded):
        result = state.result
        payload["result"] = {
            "shape": result.shape.value,
            "biological_age": result.result_single_value(),
            "panels": [panel.panel_to_dict() for panel in result_build_panels(result)],
            "total_sites_used": result.total_sites_used,
            "config": None
            if result.config is None
            else {
                "imputation_strategy": result.config.imputation_strategy,
                "normalize_data": result.config.normalize_data,
            },
        }
    elif isinstance(state, Failed):
        payload["failure"] = {
            "reason": state.reason,
            "error_type": type(state.error).__name__,
            "error_kind": _api_failure_kind(state.error),
        }
    return payload


def _api_failure_kind(error: Exception) -> str:
    if isinstance(error, FileValidationError):
        return "validation"
    if isinstance(error, AnalysisServiceError):
        return error.kind
    return "unexpected"


def api_create_workflow_router(
    controller: WorkflowController,
    notification_sink: InMemoryNotificationSink,
) -> APIRouter:
    """Create workflow router bound to one controller instance.

    Args:
        controller: Single-job workflow controller.
        notification_sink: In-memory sink the controller notifies.

    Returns:
        APIRouter: Router exposing `/workflow` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if controller is None:
        raise ValueError("controller must not be None")
    if notification_sink is None:
        raise ValueError("notification_sink must not be None")

    router = APIRouter(prefix="/workflow", tags=["workflow"])
    running_tasks: set[asyncio.Task] = set()

    def _api_forget_task(task: asyncio.Task) -> None:
        running_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Workflow run crashed", exc_info=task.exception())

    @router.post("/submissions")
    async def api_workflow_submit(files: list[UploadFile] | None = File(default=None)) -> JSONResponse:
        """Start one workflow run for the uploaded selection.

        Returns:
            JSONResponse: 202 with the workflow state, or 409 while a job is in flight.
        """

        candidates = [
            CandidateFile(
                name=upload.filename or "",
                content=await upload.read(),
                content_type=upload.content_type or "text/csv",
            )
            for upload in files or []
        ]
        try:
            task = controller.workflow_start(candidates)
        except WorkflowBusyError as error:
            payload = {
                "status": "error",
                "message": str(error),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_409_CONFLICT)

        if task is not None:
            running_tasks.add(task)
            task.add_done_callback(_api_forget_task)
        return JSONResponse(content=api_serialize_workflow_state(controller), status_code=status.HTTP_202_ACCEPTED)

    @router.get("/state")
    async def api_workflow_state() -> JSONResponse:
        return JSONResponse(content=api_serialize_workflow_state(controller), status_code=status.HTTP_200_OK)

    @router.post("/cancel")
    async def api_workflow_cancel() -> JSONResponse:
        """Signal cancellation of the in-flight job.

        Returns:
            JSONResponse: Whether a job was signalled plus the current state status.
        """

        cancelled = controller.workflow_cancel()
        payload = {"cancelled": cancelled, "status": controller.state.status.value}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/notifications")
    async def api_workflow_notifications() -> JSONResponse:
        payload = {"items": [record.record_to_dict() for record in notification_sink.records]}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
