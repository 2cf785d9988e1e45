"""Unit tests for result aggregation and the display view model."""

from __future__ import annotations

import pytest

from bioage.adapters import ClocksResultPayload, SingleValueResultPayload, SyncAgeResponsePayload
from bioage.aggregation import ResultAggregator, result_build_panels, result_format_text
from bioage.domain import (
    SINGLE_VALUE_CLOCK_NAME,
    ClockFailure,
    ClockSuccess,
    ProcessingConfig,
    ResultShape,
)

_MIXED_CLOCKS_BODY = {
    "clocks": {
        "horvath": {"predicted_age": 55.2, "std_predicted_age": 3.1, "num_samples": 300},
        "hannum": {"error": "insufficient sites"},
        "phenoage": {"predicted_age": 50.0, "std_predicted_age": 2.0, "num_samples": 300},
    },
    "total_sites_used": 12000,
    "config": {"imputation_strategy": "mean", "normalize_data": True},
}


def test_aggregation_maps_each_clock_independently() -> None:
    """Yield one outcome per clock, tagged by presence of `error`.

    Returns:
        None: Assertions validate outcomes and metadata.

    Raises:
        AssertionError: Raised when one clock's failure leaks into the others.
    """

    payload = ClocksResultPayload.model_validate(_MIXED_CLOCKS_BODY)

    result = ResultAggregator(ResultShape.CLOCKS).aggregate(payload)

    assert set(result.clocks) == {"horvath", "hannum", "phenoage"}
    assert result.clocks["horvath"] == ClockSuccess(predicted_age=55.2, std_predicted_age=3.1, num_samples=300)
    assert result.clocks["phenoage"] == ClockSuccess(predicted_age=50.0, std_predicted_age=2.0, num_samples=300)
    assert result.clocks["hannum"] == ClockFailure(error="insufficient sites")
    assert sorted(result.result_succeeded_clocks()) == ["horvath", "phenoage"]
    assert sorted(result.result_failed_clocks()) == ["hannum"]
    assert result.total_sites_used == 12000
    assert result.config == ProcessingConfig(imputation_strategy="mean", normalize_data=True)


def test_aggregation_is_pure_and_repeatable() -> None:
    payload = ClocksResultPayload.model_validate(_MIXED_CLOCKS_BODY)
    aggregator = ResultAggregator(ResultShape.CLOCKS)

    assert aggregator.aggregate(payload) == aggregator.aggregate(payload)
    assert payload.clocks["hannum"].error == "insufficient sites"


def test_aggregation_error_entry_wins_over_partial_values() -> None:
    body = {
        "clocks": {"horvath": {"predicted_age": 10.0, "error": "model crashed"}},
        "total_sites_used": 1,
        "config": {"imputation_strategy": "knn", "normalize_data": False},
    }

    result = ResultAggregator(ResultShape.CLOCKS).aggregate(ClocksResultPayload.model_validate(body))

    assert result.clocks["horvath"] == ClockFailure(error="model crashed")


def test_aggregation_result_clocks_are_read_only() -> None:
    result = ResultAggregator(ResultShape.CLOCKS).aggregate(ClocksResultPayload.model_validate(_MIXED_CLOCKS_BODY))

    with pytest.raises(TypeError):
        result.clocks["extra"] = ClockFailure(error="x")


def test_aggregation_single_value_wraps_synthetic_entry() -> None:
    aggregator = ResultAggregator(ResultShape.SINGLE_VALUE)

    job_result = aggregator.aggregate(SingleValueResultPayload(predicted_age=42.0))
    sync_result = aggregator.aggregate(SyncAgeResponsePayload.model_validate({"bioAge": 42.0}))

    assert job_result == sync_result
    assert list(job_result.clocks) == [SINGLE_VALUE_CLOCK_NAME]
    assert job_result.result_single_value() == 42.0
    assert job_result.total_sites_used is None
    assert job_result.config is None


def test_aggregation_rejects_payload_of_other_shape() -> None:
    with pytest.raises(TypeError):
        ResultAggregator(ResultShape.CLOCKS).aggregate(SingleValueResultPayload(predicted_age=42.0))
    with pytest.raises(TypeError):
        ResultAggregator(ResultShape.SINGLE_VALUE).aggregate(ClocksResultPayload.model_validate(_MIXED_CLOCKS_BODY))


def test_aggregation_panels_render_one_card_per_clock() -> None:
    """Render three independent panels, the failed one carrying inline error text."""

    result = ResultAggregator(ResultShape.CLOCKS).aggregate(ClocksResultPayload.model_validate(_MIXED_CLOCKS_BODY))

    panels = result_build_panels(result)

    assert [panel.clock_name for panel in panels] == ["hannum", "horvath", "phenoage"]
    assert [panel.succeeded for panel in panels] == [False, True, True]
    assert panels[0].error == "insufficient sites"
    assert panels[0].predicted_age is None
    assert panels[1].predicted_age == 55.2
    assert panels[1].num_samples == 300


def test_aggregation_text_rendering() -> None:
    multi_result = ResultAggregator(ResultShape.CLOCKS).aggregate(
        ClocksResultPayload.model_validate(_MIXED_CLOCKS_BODY)
    )
    single_result = ResultAggregator(ResultShape.SINGLE_VALUE).aggregate(SingleValueResultPayload(predicted_age=42.0))

    multi_text = result_format_text(multi_result)

    assert result_format_text(single_result) == "Your Biological Age: 42 years"
    assert "hannum: error: insufficient sites" in multi_text
    assert "horvath: 55.2 years (± 3.1), 300 samples" in multi_text
    assert "phenoage: 50 years (± 2.0), 300 samples" in multi_text
    assert "Sites used: 12000" in multi_text
    assert "Imputation: mean, normalized: yes" in multi_text
