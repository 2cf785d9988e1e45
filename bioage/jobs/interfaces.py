"""Typed contracts for job-layer workflow orchestration."""

from dataclasses import dataclass

from bioage.domain import ProtocolProfile


class WorkflowBusyError(RuntimeError):
    """Raised when a submission arrives while another job is in flight."""


@dataclass(frozen=True)
class WorkflowControllerConfig:
    """Configuration values for workflow orchestration.

    Attributes:
        protocol_profile: Backend contract in force for this deployment.
    """

    protocol_profile: ProtocolProfile = ProtocolProfile.JOB_CLOCKS
