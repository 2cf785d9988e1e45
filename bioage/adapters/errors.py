"""Project-native typed exceptions for analysis service adapter failures."""

from __future__ import annotations


class AnalysisServiceError(Exception):
    """Base exception for adapter-level analysis service failures.

    Attributes:
        kind: Failure kind (`status`, `transport`, `malformed`, `timeout`).
        status_code: Optional upstream HTTP status code.
    """

    kind = "unknown"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SubmitError(AnalysisServiceError):
    """Upload-phase failure. No job was created."""


class SubmitStatusError(SubmitError):
    """Upload request answered with a non-2xx status."""

    kind = "status"


class SubmitTransportError(SubmitError, ConnectionError):
    """Network-level failure while sending the upload request."""

    kind = "transport"


class SubmitMalformedError(SubmitError, ValueError):
    """Upload response body missing a usable job identifier or value."""

    kind = "malformed"


class PollError(AnalysisServiceError):
    """Terminal failure while polling a job for its result.

    Attributes:
        job_id: Identifier of the job being polled.
    """

    def __init__(self, message: str, job_id: str, status_code: int | None = None):
        super().__init__(message=message, status_code=status_code)
        self.job_id = job_id


class PollStatusError(PollError):
    """Result request answered with a status other than success or not-ready."""

    kind = "status"


class PollTransportError(PollError, ConnectionError):
    """Network-level failure while requesting a job result."""

    kind = "transport"


class PollMalformedError(PollError, ValueError):
    """Success response body that is not valid JSON or misses required fields."""

    kind = "malformed"


class PollTimeoutError(PollError, TimeoutError):
    """Configured attempt or duration bound exhausted while the job was still not ready."""

    kind = "timeout"
