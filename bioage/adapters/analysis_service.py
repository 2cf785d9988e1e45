"""Shared HTTP client for the remote analysis service."""

from __future__ import annotations

import logging
from typing import Final

import httpx

from bioage.domain import CancellationToken, CandidateFile

logger = logging.getLogger(__name__)


class AnalysisServiceHttpClient:
    """Thin httpx wrapper issuing exactly one request per call.

    Every request is raced against the workflow cancellation token. Transport
    failures surface as `httpx.HTTPError` so the calling adapter can classify
    them for its own phase.
    """

    _USER_AGENT: Final[str] = "bioage-workflow/0.1 (Python/httpx)"
    _UPLOAD_FIELD_NAME: Final[str] = "file"

    def __init__(
        self,
        base_url: str,
        request_timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the analysis service client.

        Args:
            base_url: Base URL of the analysis service.
            request_timeout_seconds: HTTP request timeout in seconds.
            transport: Optional httpx transport override, used by tests.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        normalized_base_url = base_url.strip()
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._base_url = normalized_base_url.rstrip("/")
        self._request_timeout_seconds = request_timeout_seconds
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def client_build_url(self, path: str) -> str:
        """Join one endpoint path onto the configured base URL."""

        return f"{self._base_url}/{path.lstrip('/')}"

    async def client_post_file(
        self,
        path: str,
        file: CandidateFile,
        cancellation: CancellationToken,
    ) -> httpx.Response:
        """POST one file as multipart form data under field `file`.

        Args:
            path: Endpoint path relative to the base URL.
            file: File to attach.
            cancellation: Token raced against the request.

        Returns:
            httpx.Response: Response with any status code.

        Raises:
            httpx.HTTPError: Raised for transport failures.
            WorkflowCancelledError: Raised when cancelled before the response arrived.
        """

        cancellation.token_raise_if_cancelled()
        url = self.client_build_url(path)
        files = {self._UPLOAD_FIELD_NAME: (file.name, file.content, file.content_type)}
        logger.debug("POST %s (%s, %d bytes)", url, file.name, len(file.content))
        return await cancellation.token_guard(self._client_send("POST", url, files=files))

    async def client_get(self, path: str, cancellation: CancellationToken) -> httpx.Response:
        """GET one endpoint.

        Args:
            path: Endpoint path relative to the base URL.
            cancellation: Token raced against the request.

        Returns:
            httpx.Response: Response with any status code.

        Raises:
            httpx.HTTPError: Raised for transport failures.
            WorkflowCancelledError: Raised when cancelled before the response arrived.
        """

        cancellation.token_raise_if_cancelled()
        url = self.client_build_url(path)
        logger.debug("GET %s", url)
        return await cancellation.token_guard(self._client_send("GET", url))

    async def _client_send(self, method: str, url: str, **request_options: object) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._request_timeout_seconds,
            headers={"User-Agent": self._USER_AGENT},
            transport=self._transport,
        ) as client:
            return await client.request(method, url, **request_options)
