"""Single-job workflow controller with a deterministic stage timeline."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from bioage.adapters import (
    AnalysisServiceError,
    JobSubmitterPort,
    RawResult,
    ResultPollerPort,
    SyncAgeSubmitterPort,
)
from bioage.aggregation import ResultAggregator
from bioage.domain import (
    CancellationToken,
    CandidateFile,
    Failed,
    Idle,
    Polling,
    Succeeded,
    Uploading,
    WorkflowCancelledError,
    WorkflowState,
    domain_build_stage_event,
    domain_state_is_busy,
)
from bioage.notifications import (
    BUSY_MESSAGE,
    FAILURE_MESSAGE,
    SUCCESS_MESSAGE,
    NotificationKind,
    NotificationSink,
    notification_send,
)
from bioage.validation import FileValidationError, validation_validate_candidates

from .interfaces import WorkflowBusyError, WorkflowControllerConfig

logger = logging.getLogger(__name__)


class WorkflowController:
    """Drive validate -> upload -> poll -> aggregate for one job at a time.

    State machine:
        Idle -> Uploading -> Polling(job) -> Succeeded(result)
        any failure -> Failed(reason); cancellation -> Idle

    The controller is the only mutator of the workflow state. A submission
    is claimed synchronously before the first await, so a second submission
    made while Uploading or Polling is rejected with a busy notification and
    `WorkflowBusyError`. Succeeded and Failed are left only by a new
    submission.
    """

    def __init__(
        self,
        config: WorkflowControllerConfig,
        notification_sink: NotificationSink,
        job_submitter: JobSubmitterPort | None = None,
        result_poller: ResultPollerPort | None = None,
        sync_submitter: SyncAgeSubmitterPort | None = None,
        aggregator: ResultAggregator | None = None,
    ):
        """Initialize workflow controller dependencies.

        Args:
            config: Workflow configuration with the active protocol profile.
            notification_sink: Sink receiving user-facing outcomes.
            job_submitter: Upload adapter, required by job-based profiles.
            result_poller: Polling adapter, required by job-based profiles.
            sync_submitter: Single-request adapter, required by the synchronous profile.
            aggregator: Optional aggregator, built from the profile shape by default.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies do not match the active profile.
        """

        if notification_sink is None:
            raise ValueError("notification_sink must not be None")

        profile = config.protocol_profile
        if profile.uses_polling:
            if job_submitter is None:
                raise ValueError(f"job_submitter is required for profile {profile.value}")
            if result_poller is None:
                raise ValueError(f"result_poller is required for profile {profile.value}")
            if result_poller.result_shape is not profile.result_shape:
                raise ValueError("result_poller shape does not match the protocol profile")
        elif sync_submitter is None:
            raise ValueError(f"sync_submitter is required for profile {profile.value}")

        resolved_aggregator = aggregator or ResultAggregator(profile.result_shape)
        if resolved_aggregator.result_shape is not profile.result_shape:
            raise ValueError("aggregator shape does not match the protocol profile")

        self._config = config
        self._notification_sink = notification_sink
        self._job_submitter = job_submitter
        self._result_poller = result_poller
        self._sync_submitter = sync_submitter
        self._aggregator = resolved_aggregator
        self._state: WorkflowState = Idle()
        self._timeline: list[dict[str, object]] = []
        self._active_stage = "validate"
        self._cancellation: CancellationToken | None = None

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def timeline(self) -> list[dict[str, object]]:
        return list(self._timeline)

    @property
    def config(self) -> WorkflowControllerConfig:
        return self._config

    def workflow_is_busy(self) -> bool:
        return domain_state_is_busy(self._state)

    async def workflow_submit(self, candidates: Sequence[CandidateFile]) -> WorkflowState:
        """Run one submission to its terminal state.

        Args:
            candidates: Files delivered by the file source.

        Returns:
            WorkflowState: Succeeded, Failed, or Idle when cancelled.

        Raises:
            WorkflowBusyError: Raised when another job is in flight.
        """

        claimed = self._workflow_begin(candidates)
        if claimed is None:
            return self._state
        file, cancellation = claimed
        return await self._workflow_run(file=file, cancellation=cancellation)

    def workflow_start(self, candidates: Sequence[CandidateFile]) -> "asyncio.Task[WorkflowState] | None":
        """Claim the job slot and schedule the run on the running event loop.

        Args:
            candidates: Files delivered by the file source.

        Returns:
            asyncio.Task[WorkflowState] | None: Scheduled run, or None when
            validation already moved the workflow to Failed.

        Raises:
            WorkflowBusyError: Raised when another job is in flight.
            RuntimeError: Raised when called outside a running event loop.
        """

        loop = asyncio.get_running_loop()
        claimed = self._workflow_begin(candidates)
        if claimed is None:
            return None
        file, cancellation = claimed
        return loop.create_task(self._workflow_run(file=file, cancellation=cancellation))

    def workflow_cancel(self) -> bool:
        """Cancel the in-flight job, if any.

        The run returns to Idle at its next suspension point without any
        notification.

        Returns:
            bool: True when an in-flight job was signalled.
        """

        if self._cancellation is None or not self.workflow_is_busy():
            return False
        logger.info("Cancellation requested while %s", self._state.status.value)
        self._cancellation.token_cancel()
        return True

    def _workflow_begin(self, candidates: Sequence[CandidateFile]) -> tuple[CandidateFile, CancellationToken] | None:
        if self.workflow_is_busy():
            notification_send(self._notification_sink, BUSY_MESSAGE)
            raise WorkflowBusyError(f"a job is already {self._state.status.value}")

        self._timeline = []
        self._workflow_transition(Idle())
        self._workflow_record_stage(stage="validate", status="started", details={"file_count": len(candidates)})
        try:
            file = validation_validate_candidates(candidates)
        except FileValidationError as error:
            self._workflow_record_failure(error)
            self._workflow_transition(Failed(reason=str(error), error=error))
            self._notification_sink.notify(NotificationKind.ERROR, error.title, error.detail)
            return None
        self._workflow_record_stage(stage="validate", status="completed", details={"file_name": file.name})

        cancellation = CancellationToken()
        self._cancellation = cancellation
        self._workflow_transition(Uploading())
        return file, cancellation

    async def _workflow_run(self, file: CandidateFile, cancellation: CancellationToken) -> WorkflowState:
        try:
            raw_result = await self._workflow_fetch_raw_result(file=file, cancellation=cancellation)
            self._workflow_record_stage(stage="aggregate", status="started")
            result = self._aggregator.aggregate(raw_result)
            self._workflow_record_stage(
                stage="aggregate",
                status="completed",
                details={
                    "clock_count": len(result.clocks),
                    "failed_clocks": sorted(result.result_failed_clocks()),
                },
            )
        except WorkflowCancelledError:
            self._workflow_record_stage(stage=self._active_stage, status="cancelled")
            self._workflow_transition(Idle())
        except asyncio.CancelledError:
            self._workflow_record_stage(stage=self._active_stage, status="cancelled")
            self._workflow_transition(Idle())
            raise
        except AnalysisServiceError as error:
            self._workflow_record_failure(error)
            self._workflow_transition(Failed(reason=str(error), error=error))
            notification_send(self._notification_sink, FAILURE_MESSAGE)
        except Exception as error:
            self._workflow_record_failure(error)
            self._workflow_transition(Failed(reason=f"unexpected failure: {error}", error=error))
            notification_send(self._notification_sink, FAILURE_MESSAGE)
            raise
        else:
            self._workflow_transition(Succeeded(result=result))
            notification_send(self._notification_sink, SUCCESS_MESSAGE)
        finally:
            self._cancellation = None
        return self._state

    async def _workflow_fetch_raw_result(self, file: CandidateFile, cancellation: CancellationToken) -> RawResult:
        self._workflow_record_stage(stage="upload", status="started", details={"file_name": file.name})
        if not self._config.protocol_profile.uses_polling:
            raw_result = await self._sync_submitter.submitter_submit_and_wait(file=file, cancellation=cancellation)
            self._workflow_record_stage(stage="upload", status="completed")
            return raw_result

        job = await self._job_submitter.submitter_submit(file=file, cancellation=cancellation)
        self._workflow_record_stage(stage="upload", status="completed", details={"job_id": job.job_id})
        cancellation.token_raise_if_cancelled()

        self._workflow_transition(Polling(job=job))
        self._workflow_record_stage(stage="poll", status="started", details={"job_id": job.job_id})

        def _record_not_ready(attempt: int) -> None:
            self._workflow_record_stage(stage="poll", status="retrying", details={"poll_attempt": attempt})

        raw_result = await self._result_poller.poller_wait_for_result(
            job=job,
            cancellation=cancellation,
            on_not_ready=_record_not_ready,
        )
        self._workflow_record_stage(stage="poll", status="completed", details={"job_id": job.job_id})
        return raw_result

    def _workflow_transition(self, state: WorkflowState) -> None:
        if state.status is not self._state.status:
            logger.info("Workflow %s -> %s", self._state.status.value, state.status.value)
        self._state = state

    def _workflow_record_stage(self, stage: str, status: str, details: dict[str, object] | None = None) -> None:
        self._active_stage = stage
        self._timeline.append(domain_build_stage_event(stage=stage, status=status, details=details))

    def _workflow_record_failure(self, error: Exception) -> None:
        details: dict[str, object] = {"error_type": type(error).__name__, "message": str(error)}
        if isinstance(error, AnalysisServiceError):
            details["error_kind"] = error.kind
            if error.status_code is not None:
                details["status_code"] = error.status_code
        logger.warning("Workflow stage %s failed: %s", self._active_stage, error)
        self._workflow_record_stage(stage=self._active_stage, status="failed", details=details)
