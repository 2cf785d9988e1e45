"""Domain models used across application layer boundaries."""

from .cancellation import CancellationToken, WorkflowCancelledError
from .models import (
	SINGLE_VALUE_CLOCK_NAME,
	AnalysisResult,
	CandidateFile,
	ClockFailure,
	ClockOutcome,
	ClockSuccess,
	Job,
	ProcessingConfig,
	ProtocolProfile,
	ResultShape,
)
from .timeline import domain_build_stage_event
from .workflow_state import (
	Failed,
	Idle,
	Polling,
	Succeeded,
	Uploading,
	WorkflowState,
	WorkflowStatus,
	domain_state_is_busy,
)

__all__ = [
	"SINGLE_VALUE_CLOCK_NAME",
	"AnalysisResult",
	"CancellationToken",
	"CandidateFile",
	"ClockFailure",
	"ClockOutcome",
	"ClockSuccess",
	"Failed",
	"Idle",
	"Job",
	"Polling",
	"ProcessingConfig",
	"ProtocolProfile",
	"ResultShape",
	"Succeeded",
	"Uploading",
	"WorkflowCancelledError",
	"WorkflowState",
	"WorkflowStatus",
	"domain_build_stage_event",
	"domain_state_is_busy",
]
