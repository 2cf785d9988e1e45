"""Typed domain models shared across runtime layers.

These contracts describe the submitted file, the backend job handle and the
aggregated analysis result. All of them are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


class ProtocolProfile(str, Enum):
    """Backend contract selected per deployment."""

    JOB_CLOCKS = "job_clocks"
    JOB_SINGLE_VALUE = "job_single_value"
    SYNC_SINGLE_VALUE = "sync_single_value"

    @property
    def result_shape(self) -> "ResultShape":
        """Return the terminal payload shape carried by this profile."""

        if self is ProtocolProfile.JOB_CLOCKS:
            return ResultShape.CLOCKS
        return ResultShape.SINGLE_VALUE

    @property
    def uses_polling(self) -> bool:
        """Return whether this profile uploads first and polls for the result."""

        return self is not ProtocolProfile.SYNC_SINGLE_VALUE


class ResultShape(str, Enum):
    """Terminal result body layout."""

    CLOCKS = "clocks"
    SINGLE_VALUE = "single_value"


SINGLE_VALUE_CLOCK_NAME = "biological_age"


@dataclass(frozen=True)
class CandidateFile:
    """One user-selected file offered for submission.

    Attributes:
        name: File name as provided by the file source.
        content: Raw file bytes.
        content_type: Content type forwarded in the multipart part.
    """

    name: str
    content: bytes
    content_type: str = "text/csv"


@dataclass(frozen=True)
class Job:
    """Opaque backend job handle assigned on successful upload.

    Attributes:
        job_id: Backend-assigned identifier.
    """

    job_id: str


@dataclass(frozen=True)
class ClockSuccess:
    """Successful prediction from one clock.

    Attributes:
        predicted_age: Predicted biological age in years.
        std_predicted_age: Standard deviation across samples, None for single-value results.
        num_samples: Number of samples scored, None for single-value results.
    """

    predicted_age: float
    std_predicted_age: float | None = None
    num_samples: int | None = None


@dataclass(frozen=True)
class ClockFailure:
    """Failed prediction from one clock.

    Attributes:
        error: Backend-provided failure description.
    """

    error: str


ClockOutcome = Union[ClockSuccess, ClockFailure]


@dataclass(frozen=True)
class ProcessingConfig:
    """Backend preprocessing configuration echoed with multi-clock results.

    Attributes:
        imputation_strategy: Policy used to fill missing site measurements.
        normalize_data: Whether input measurements were normalized.
    """

    imputation_strategy: str
    normalize_data: bool


@dataclass(frozen=True)
class AnalysisResult:
    """Aggregated result of one analysis job.

    Attributes:
        shape: Result shape the outcomes were mapped from.
        clocks: Read-only mapping of clock name to outcome.
        total_sites_used: Number of methylation sites used, None for single-value results.
        config: Backend preprocessing configuration, None for single-value results.
    """

    shape: ResultShape
    clocks: Mapping[str, ClockOutcome]
    total_sites_used: int | None = None
    config: ProcessingConfig | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "clocks", MappingProxyType(dict(self.clocks)))

    def result_succeeded_clocks(self) -> dict[str, ClockSuccess]:
        """Return successful clock outcomes keyed by clock name."""

        return {name: outcome for name, outcome in self.clocks.items() if isinstance(outcome, ClockSuccess)}

    def result_failed_clocks(self) -> dict[str, ClockFailure]:
        """Return failed clock outcomes keyed by clock name."""

        return {name: outcome for name, outcome in self.clocks.items() if isinstance(outcome, ClockFailure)}

    def result_single_value(self) -> float | None:
        """Return the predicted age for single-value results.

        Returns:
            float | None: Predicted age when the result carries the synthetic
            single-value entry and it succeeded, else None.
        """

        outcome = self.clocks.get(SINGLE_VALUE_CLOCK_NAME)
        if self.shape is ResultShape.SINGLE_VALUE and isinstance(outcome, ClockSuccess):
            return outcome.predicted_age
        return None
