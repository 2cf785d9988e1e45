"""Result polling adapter for job-based analysis profiles."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from bioage.domain import CancellationToken, Job, ResultShape

from .analysis_service import AnalysisServiceHttpClient
from .errors import PollMalformedError, PollStatusError, PollTimeoutError, PollTransportError
from .interfaces import NotReadyCallback, ResultPollerPort
from .payloads import ClocksResultPayload, RawResult, SingleValueResultPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PollRetryPolicy:
    """Immutable not-ready retry policy.

    The wait between attempts is fixed; there is no backoff. A None bound
    means polling continues until the backend answers with anything other
    than the not-ready status.

    Attributes:
        interval_seconds: Fixed wait after each not-ready response.
        max_attempts: Optional cap on poll requests per job.
        max_duration_seconds: Optional cap on elapsed polling time per job.
        not_ready_status_code: HTTP status signalling "not ready yet".
    """

    interval_seconds: float = 1.0
    max_attempts: int | None = None
    max_duration_seconds: float | None = None
    not_ready_status_code: int = 400

    def __post_init__(self) -> None:
        if self.interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1 when set")
        if self.max_duration_seconds is not None and self.max_duration_seconds <= 0:
            raise ValueError("max_duration_seconds must be > 0 when set")

    def policy_allows_retry(self, attempts_made: int, elapsed_seconds: float) -> bool:
        """Return whether another poll may follow a not-ready response.

        Args:
            attempts_made: Poll requests already issued for the job.
            elapsed_seconds: Seconds since the first poll request.

        Returns:
            bool: True when neither configured bound is exhausted.
        """

        if self.max_attempts is not None and attempts_made >= self.max_attempts:
            return False
        if self.max_duration_seconds is not None and elapsed_seconds >= self.max_duration_seconds:
            return False
        return True


class ResultPoller(ResultPollerPort):
    """Poll the per-job result endpoint until a terminal response arrives.

    Per job: pending -> pending (not-ready) -> ready | failed. Waiting uses
    the injected coroutine sleep so the event loop stays responsive, and
    every request and wait is raced against the cancellation token.
    """

    def __init__(
        self,
        http_client: AnalysisServiceHttpClient,
        result_shape: ResultShape,
        result_path_template: str = "/api/samples/{job_id}/result",
        retry_policy: PollRetryPolicy | None = None,
        sleep_provider: Callable[[float], Awaitable[None]] | None = None,
        monotonic_provider: Callable[[], float] | None = None,
    ):
        """Initialize result poller.

        Args:
            http_client: Shared analysis service client.
            result_shape: Terminal body shape for the active profile.
            result_path_template: Result endpoint path containing `{job_id}`.
            retry_policy: Not-ready retry policy, unbounded 1 s interval by default.
            sleep_provider: Optional coroutine sleep, `asyncio.sleep` by default.
            monotonic_provider: Optional monotonic clock, `time.monotonic` by default.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        if http_client is None:
            raise ValueError("http_client must not be None")
        if "{job_id}" not in result_path_template:
            raise ValueError("result_path_template must contain {job_id}")

        self._http_client = http_client
        self._result_shape = ResultShape(result_shape)
        self._result_path_template = result_path_template
        self._retry_policy = retry_policy or PollRetryPolicy()
        self._sleep_provider = sleep_provider or asyncio.sleep
        self._monotonic_provider = monotonic_provider or time.monotonic

    @property
    def result_shape(self) -> ResultShape:
        return self._result_shape

    @property
    def retry_policy(self) -> PollRetryPolicy:
        return self._retry_policy

    async def poller_wait_for_result(
        self,
        job: Job,
        cancellation: CancellationToken,
        on_not_ready: NotReadyCallback | None = None,
    ) -> RawResult:
        """Poll one job until it is ready or fails terminally.

        Args:
            job: Backend job handle.
            cancellation: Token checked at every request and wait.
            on_not_ready: Optional callback invoked with the attempt number on each not-ready response.

        Returns:
            RawResult: Validated terminal payload.

        Raises:
            PollStatusError: Raised on a non-success status other than not-ready.
            PollTransportError: Raised on network failures.
            PollMalformedError: Raised when the success body does not match the active shape.
            PollTimeoutError: Raised when a configured bound is exhausted.
            WorkflowCancelledError: Raised when cancelled before completion.
        """

        started_at = self._monotonic_provider()
        attempts_made = 0
        while True:
            attempts_made += 1
            raw_result = await self.poller_poll_once(job=job, cancellation=cancellation)
            if raw_result is not None:
                logger.info("Job %s ready after %d poll attempt(s)", job.job_id, attempts_made)
                return raw_result

            if on_not_ready is not None:
                on_not_ready(attempts_made)

            elapsed_seconds = self._monotonic_provider() - started_at
            if not self._retry_policy.policy_allows_retry(attempts_made, elapsed_seconds):
                raise PollTimeoutError(
                    f"job {job.job_id} not ready after {attempts_made} attempt(s) in {elapsed_seconds:.1f}s",
                    job_id=job.job_id,
                    status_code=self._retry_policy.not_ready_status_code,
                )

            logger.debug("Job %s not ready, retrying in %.1fs", job.job_id, self._retry_policy.interval_seconds)
            cancellation.token_raise_if_cancelled()
            await cancellation.token_guard(self._sleep_provider(self._retry_policy.interval_seconds))

    async def poller_poll_once(self, job: Job, cancellation: CancellationToken) -> RawResult | None:
        """Issue one result request for a job.

        Args:
            job: Backend job handle.
            cancellation: Token raced against the request.

        Returns:
            RawResult | None: Validated payload when ready, None on the not-ready signal.

        Raises:
            PollStatusError: Raised on a non-success status other than not-ready.
            PollTransportError: Raised on network failures.
            PollMalformedError: Raised when the success body does not match the active shape.
            WorkflowCancelledError: Raised when cancelled before completion.
        """

        path = self._result_path_template.format(job_id=quote(job.job_id, safe=""))
        try:
            response = await self._http_client.client_get(path=path, cancellation=cancellation)
        except httpx.TimeoutException as error:
            raise PollTransportError("result request timed out", job_id=job.job_id) from error
        except httpx.HTTPError as error:
            raise PollTransportError(f"result request failed: {error}", job_id=job.job_id) from error

        if response.status_code == self._retry_policy.not_ready_status_code:
            return None
        if not response.is_success:
            raise PollStatusError(
                f"result request for job {job.job_id} returned HTTP {response.status_code}",
                job_id=job.job_id,
                status_code=response.status_code,
            )
        return self._poller_parse_result(job=job, response=response)

    def _poller_parse_result(self, job: Job, response: httpx.Response) -> RawResult:
        payload_model = ClocksResultPayload if self._result_shape is ResultShape.CLOCKS else SingleValueResultPayload
        try:
            return payload_model.model_validate_json(response.content)
        except ValidationError as error:
            raise PollMalformedError(
                f"result body for job {job.job_id} does not match the {self._result_shape.value} shape",
                job_id=job.job_id,
                status_code=response.status_code,
            ) from error
