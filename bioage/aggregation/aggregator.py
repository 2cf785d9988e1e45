"""Pure mapping from validated terminal payloads onto analysis results."""

from __future__ import annotations

from bioage.adapters import (
    ClockEntryPayload,
    ClocksResultPayload,
    RawResult,
    SingleValueResultPayload,
    SyncAgeResponsePayload,
)
from bioage.domain import (
    SINGLE_VALUE_CLOCK_NAME,
    AnalysisResult,
    ClockFailure,
    ClockOutcome,
    ClockSuccess,
    ProcessingConfig,
    ResultShape,
)


class ResultAggregator:
    """Map one validated payload onto an `AnalysisResult` for a fixed shape.

    The aggregator is bound to the shape of the active profile and refuses
    payloads of the other shape. Each clock entry is mapped on its own, so one
    failed clock never affects the others.
    """

    def __init__(self, result_shape: ResultShape):
        self._result_shape = ResultShape(result_shape)

    @property
    def result_shape(self) -> ResultShape:
        return self._result_shape

    def aggregate(self, raw_result: RawResult) -> AnalysisResult:
        """Build the analysis result for one terminal payload.

        Args:
            raw_result: Payload already validated by the poller or submitter.

        Returns:
            AnalysisResult: Immutable aggregated result.

        Raises:
            TypeError: Raised when the payload shape does not match the bound shape.
        """

        if self._result_shape is ResultShape.CLOCKS:
            if not isinstance(raw_result, ClocksResultPayload):
                raise TypeError(f"expected clocks payload, got {type(raw_result).__name__}")
            return aggregation_map_clocks_payload(raw_result)

        if isinstance(raw_result, SingleValueResultPayload):
            return aggregation_map_single_value(raw_result.predicted_age)
        if isinstance(raw_result, SyncAgeResponsePayload):
            return aggregation_map_single_value(raw_result.bio_age)
        raise TypeError(f"expected single-value payload, got {type(raw_result).__name__}")


def aggregation_map_clock_entry(entry: ClockEntryPayload) -> ClockOutcome:
    """Map one clock entry to success or failure by presence of `error`."""

    if entry.error is not None:
        return ClockFailure(error=entry.error)
    return ClockSuccess(
        predicted_age=float(entry.predicted_age),
        std_predicted_age=float(entry.std_predicted_age),
        num_samples=int(entry.num_samples),
    )


def aggregation_map_clocks_payload(payload: ClocksResultPayload) -> AnalysisResult:
    """Map a multi-clock payload onto one outcome per clock."""

    return AnalysisResult(
        shape=ResultShape.CLOCKS,
        clocks={clock_name: aggregation_map_clock_entry(entry) for clock_name, entry in payload.clocks.items()},
        total_sites_used=payload.total_sites_used,
        config=ProcessingConfig(
            imputation_strategy=payload.config.imputation_strategy,
            normalize_data=payload.config.normalize_data,
        ),
    )


def aggregation_map_single_value(predicted_age: float) -> AnalysisResult:
    """Wrap one predicted age into a synthetic one-entry result."""

    return AnalysisResult(
        shape=ResultShape.SINGLE_VALUE,
        clocks={SINGLE_VALUE_CLOCK_NAME: ClockSuccess(predicted_age=float(predicted_age))},
    )
