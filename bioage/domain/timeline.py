"""Shared workflow timeline event helpers."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured workflow timeline event.

    Args:
        stage: Workflow stage name (`validate`, `upload`, `poll`, `aggregate`).
        status: Stage status marker (`started`, `retrying`, `completed`, `failed`, `cancelled`).
        details: Optional structured details object.

    Returns:
        dict[str, object]: Timeline event with a UTC timestamp.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details:
        event_payload["details"] = dict(details)
    return event_payload
