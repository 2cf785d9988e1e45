"""Adapter layer package for analysis service integration boundaries."""

from .analysis_service import AnalysisServiceHttpClient
from .errors import (
	AnalysisServiceError,
	PollError,
	PollMalformedError,
	PollStatusError,
	PollTimeoutError,
	PollTransportError,
	SubmitError,
	SubmitMalformedError,
	SubmitStatusError,
	SubmitTransportError,
)
from .interfaces import JobSubmitterPort, NotReadyCallback, ResultPollerPort, SyncAgeSubmitterPort
from .job_submitter import JobSubmitter
from .payloads import (
	ClockEntryPayload,
	ClocksResultPayload,
	ProcessingConfigPayload,
	RawResult,
	SingleValueResultPayload,
	SyncAgeResponsePayload,
	UploadResponsePayload,
)
from .result_poller import PollRetryPolicy, ResultPoller
from .sync_submitter import SyncAgeSubmitter

__all__ = [
	"AnalysisServiceError",
	"AnalysisServiceHttpClient",
	"ClockEntryPayload",
	"ClocksResultPayload",
	"JobSubmitter",
	"JobSubmitterPort",
	"NotReadyCallback",
	"PollError",
	"PollMalformedError",
	"PollRetryPolicy",
	"PollStatusError",
	"PollTimeoutError",
	"PollTransportError",
	"ProcessingConfigPayload",
	"RawResult",
	"ResultPoller",
	"ResultPollerPort",
	"SingleValueResultPayload",
	"SubmitError",
	"SubmitMalformedError",
	"SubmitStatusError",
	"SubmitTransportError",
	"SyncAgeResponsePayload",
	"SyncAgeSubmitter",
	"SyncAgeSubmitterPort",
	"UploadResponsePayload",
]
