"""Workflow state variants owned by the workflow controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .models import AnalysisResult, Job


class WorkflowStatus(str, Enum):
    """Discriminator for workflow state variants."""

    IDLE = "idle"
    UPLOADING = "uploading"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Idle:
    status: WorkflowStatus = WorkflowStatus.IDLE


@dataclass(frozen=True)
class Uploading:
    status: WorkflowStatus = WorkflowStatus.UPLOADING


@dataclass(frozen=True)
class Polling:
    job: Job
    status: WorkflowStatus = WorkflowStatus.POLLING


@dataclass(frozen=True)
class Succeeded:
    result: AnalysisResult
    status: WorkflowStatus = WorkflowStatus.SUCCEEDED


@dataclass(frozen=True)
class Failed:
    """Terminal failure state.

    Attributes:
        reason: Human-readable failure description.
        error: Exception that ended the workflow.
    """

    reason: str
    error: Exception
    status: WorkflowStatus = WorkflowStatus.FAILED


WorkflowState = Union[Idle, Uploading, Polling, Succeeded, Failed]

BUSY_STATUSES = frozenset({WorkflowStatus.UPLOADING, WorkflowStatus.POLLING})


def domain_state_is_busy(state: WorkflowState) -> bool:
    """Return whether a job is in flight for the given state."""

    return state.status in BUSY_STATUSES
