"""Cooperative cancellation for workflow suspension points."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")


class WorkflowCancelledError(Exception):
    """Raised at a suspension point after the workflow was cancelled."""


class CancellationToken:
    """One-shot cancellation signal shared by every await in a workflow run.

    The token is checked before each suspension point and raced against the
    pending operation, so an in-flight request or poll wait is abandoned as
    soon as the token fires.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def token_cancel(self) -> None:
        """Fire the token. Repeated calls are no-ops."""

        self._event.set()

    def token_raise_if_cancelled(self) -> None:
        """Raise WorkflowCancelledError when the token has fired.

        Raises:
            WorkflowCancelledError: Raised when the token has fired.
        """

        if self._event.is_set():
            raise WorkflowCancelledError("workflow was cancelled")

    async def token_guard(self, awaitable: Awaitable[_T]) -> _T:
        """Await one operation unless the token fires first.

        Args:
            awaitable: Operation to run until completion or cancellation.

        Returns:
            _T: Result of the operation when it finished first.

        Raises:
            WorkflowCancelledError: Raised when the token fired before the operation finished.
        """

        self.token_raise_if_cancelled()
        operation = asyncio.ensure_future(awaitable)
        cancel_waiter = asyncio.ensure_future(self._event.wait())
        try:
            await asyncio.wait({operation, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_waiter.cancel()
            if not operation.done():
                operation.cancel()
                await asyncio.gather(operation, return_exceptions=True)

        if operation.cancelled():
            raise WorkflowCancelledError("workflow was cancelled")
        return operation.result()
