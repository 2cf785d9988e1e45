"""Notification sink port and the runtime implementations."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Final, Protocol

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class NotificationMessage:
    """Fixed user-facing copy for one notification.

    Attributes:
        kind: Notification severity.
        title: Short headline.
        detail: One-sentence description.
    """

    kind: NotificationKind
    title: str
    detail: str


SUCCESS_MESSAGE: Final[NotificationMessage] = NotificationMessage(
    kind=NotificationKind.SUCCESS,
    title="Success",
    detail="Your biological age has been calculated.",
)
FAILURE_MESSAGE: Final[NotificationMessage] = NotificationMessage(
    kind=NotificationKind.ERROR,
    title="Error",
    detail="Failed to process the CSV file. Please try again.",
)
BUSY_MESSAGE: Final[NotificationMessage] = NotificationMessage(
    kind=NotificationKind.INFO,
    title="Analysis in progress",
    detail="Please wait for the current file to finish processing.",
)


class NotificationSink(Protocol):
    """Port for surfacing workflow outcomes to the user."""

    def notify(self, kind: NotificationKind, title: str, detail: str) -> None:
        """Deliver one non-blocking notification.

        Args:
            kind: Notification severity.
            title: Short headline.
            detail: One-sentence description.

        Returns:
            None: Delivery is a side effect.
        """


def notification_send(sink: NotificationSink, message: NotificationMessage) -> None:
    """Deliver one fixed message through a sink."""

    sink.notify(message.kind, message.title, message.detail)


class LoggingNotificationSink(NotificationSink):
    """Write notifications through `logging`, used by the CLI runtime."""

    _LEVELS: Final[dict[NotificationKind, int]] = {
        NotificationKind.SUCCESS: logging.INFO,
        NotificationKind.INFO: logging.INFO,
        NotificationKind.ERROR: logging.ERROR,
    }

    def __init__(self, target_logger: logging.Logger | None = None):
        self._logger = target_logger or logger

    def notify(self, kind: NotificationKind, title: str, detail: str) -> None:
        self._logger.log(self._LEVELS[NotificationKind(kind)], "%s: %s", title, detail)


@dataclass(frozen=True)
class NotificationRecord:
    kind: NotificationKind
    title: str
    detail: str
    at_utc: str

    def record_to_dict(self) -> dict[str, str]:
        payload = asdict(self)
        payload["kind"] = self.kind.value
        return payload


class InMemoryNotificationSink(NotificationSink):
    """Keep a bounded notification history, newest last.

    Used by the HTTP surface, where clients fetch notifications instead of
    receiving toasts, and by tests.
    """

    def __init__(self, history_limit: int = 50):
        if history_limit < 1:
            raise ValueError("history_limit must be >= 1")
        self._records: deque[NotificationRecord] = deque(maxlen=history_limit)

    def notify(self, kind: NotificationKind, title: str, detail: str) -> None:
        self._records.append(
            NotificationRecord(
                kind=NotificationKind(kind),
                title=title,
                detail=detail,
                at_utc=datetime.now(timezone.utc).isoformat(),
            )
        )

    @property
    def records(self) -> tuple[NotificationRecord, ...]:
        return tuple(self._records)
