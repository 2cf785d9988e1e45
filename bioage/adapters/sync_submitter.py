"""Single-request adapter for the synchronous single-value profile."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from bioage.domain import CancellationToken, CandidateFile

from .analysis_service import AnalysisServiceHttpClient
from .errors import SubmitMalformedError, SubmitStatusError, SubmitTransportError
from .interfaces import SyncAgeSubmitterPort
from .payloads import SyncAgeResponsePayload

logger = logging.getLogger(__name__)


class SyncAgeSubmitter(SyncAgeSubmitterPort):
    """Upload one file and read `bioAge` from the same response. No polling."""

    def __init__(self, http_client: AnalysisServiceHttpClient, sync_path: str = "/getbioage"):
        if http_client is None:
            raise ValueError("http_client must not be None")
        if not sync_path.strip():
            raise ValueError("sync_path must not be blank")

        self._http_client = http_client
        self._sync_path = sync_path.strip()

    async def submitter_submit_and_wait(
        self,
        file: CandidateFile,
        cancellation: CancellationToken,
    ) -> SyncAgeResponsePayload:
        """Upload one file and return the computed age.

        Args:
            file: Validated candidate file.
            cancellation: Token raced against the request.

        Returns:
            SyncAgeResponsePayload: Validated response body.

        Raises:
            SubmitStatusError: Raised on any non-2xx response.
            SubmitTransportError: Raised on network failures.
            SubmitMalformedError: Raised when the body has no numeric `bioAge`.
            WorkflowCancelledError: Raised when cancelled before completion.
        """

        try:
            response = await self._http_client.client_post_file(
                path=self._sync_path,
                file=file,
                cancellation=cancellation,
            )
        except httpx.TimeoutException as error:
            raise SubmitTransportError("age request timed out") from error
        except httpx.HTTPError as error:
            raise SubmitTransportError(f"age request failed: {error}") from error

        if not response.is_success:
            raise SubmitStatusError(f"age request returned HTTP {response.status_code}", status_code=response.status_code)

        try:
            payload = SyncAgeResponsePayload.model_validate_json(response.content)
        except ValidationError as error:
            raise SubmitMalformedError(
                "age response does not carry a numeric bioAge",
                status_code=response.status_code,
            ) from error

        logger.info("Computed biological age for %s in one request", file.name)
        return payload
