"""Upload adapter for job-based analysis profiles."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from bioage.domain import CancellationToken, CandidateFile, Job

from .analysis_service import AnalysisServiceHttpClient
from .errors import SubmitMalformedError, SubmitStatusError, SubmitTransportError
from .interfaces import JobSubmitterPort
from .payloads import UploadResponsePayload

logger = logging.getLogger(__name__)


class JobSubmitter(JobSubmitterPort):
    """Upload one file and return the backend-assigned job handle.

    One request per call; this layer never retries.
    """

    def __init__(self, http_client: AnalysisServiceHttpClient, upload_path: str = "/api/upload"):
        if http_client is None:
            raise ValueError("http_client must not be None")
        if not upload_path.strip():
            raise ValueError("upload_path must not be blank")

        self._http_client = http_client
        self._upload_path = upload_path.strip()

    async def submitter_submit(self, file: CandidateFile, cancellation: CancellationToken) -> Job:
        """Upload one validated file.

        Args:
            file: Validated candidate file.
            cancellation: Token checked before and raced against the request.

        Returns:
            Job: Backend job handle.

        Raises:
            SubmitStatusError: Raised on any non-2xx response.
            SubmitTransportError: Raised on DNS, connection or timeout failures.
            SubmitMalformedError: Raised when the body has no string `id`.
            WorkflowCancelledError: Raised when cancelled before completion.
        """

        try:
            response = await self._http_client.client_post_file(
                path=self._upload_path,
                file=file,
                cancellation=cancellation,
            )
        except httpx.TimeoutException as error:
            raise SubmitTransportError("upload request timed out") from error
        except httpx.HTTPError as error:
            raise SubmitTransportError(f"upload request failed: {error}") from error

        if not response.is_success:
            raise SubmitStatusError(
                f"upload returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            payload = UploadResponsePayload.model_validate_json(response.content)
        except ValidationError as error:
            raise SubmitMalformedError(
                "upload response does not carry a string id",
                status_code=response.status_code,
            ) from error

        logger.info("Uploaded %s as job %s", file.name, payload.id)
        return Job(job_id=payload.id)
