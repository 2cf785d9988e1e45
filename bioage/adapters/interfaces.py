"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from typing import Protocol

from bioage.domain import CancellationToken, CandidateFile, Job, ResultShape

from .payloads import RawResult, SyncAgeResponsePayload


class JobSubmitterPort(Protocol):
    """Port for uploading one file and obtaining a backend job handle."""

    async def submitter_submit(self, file: CandidateFile, cancellation: CancellationToken) -> Job:
        """Upload one validated file.

        Args:
            file: Validated candidate file.
            cancellation: Token checked before and raced against the request.

        Returns:
            Job: Backend job handle.

        Raises:
            SubmitError: Raised for status, transport or malformed-body failures.
            WorkflowCancelledError: Raised when cancelled before completion.
        """


class ResultPollerPort(Protocol):
    """Port for polling a job until a terminal response arrives."""

    @property
    def result_shape(self) -> ResultShape:
        """Return the terminal body shape this poller parses."""

    async def poller_wait_for_result(
        self,
        job: Job,
        cancellation: CancellationToken,
        on_not_ready: "NotReadyCallback | None" = None,
    ) -> RawResult:
        """Poll one job until it is ready or fails terminally.

        Args:
            job: Backend job handle.
            cancellation: Token checked at every request and wait.
            on_not_ready: Optional callback invoked with the attempt number on each not-ready response.

        Returns:
            RawResult: Validated terminal payload.

        Raises:
            PollError: Raised for terminal status, transport, malformed or bound-exhausted failures.
            WorkflowCancelledError: Raised when cancelled before completion.
        """


class SyncAgeSubmitterPort(Protocol):
    """Port for the single-request synchronous profile."""

    async def submitter_submit_and_wait(
        self,
        file: CandidateFile,
        cancellation: CancellationToken,
    ) -> SyncAgeResponsePayload:
        """Upload one file and return the computed age in the same response.

        Raises:
            SubmitError: Raised for status, transport or malformed-body failures.
            WorkflowCancelledError: Raised when cancelled before completion.
        """


class NotReadyCallback(Protocol):
    def __call__(self, attempt: int) -> None:
        """Observe one not-ready poll response."""
