"""Aggregation package mapping terminal payloads onto display-ready results."""

from .aggregator import (
	ResultAggregator,
	aggregation_map_clock_entry,
	aggregation_map_clocks_payload,
	aggregation_map_single_value,
)
from .result_view import ResultPanel, result_build_panels, result_format_age, result_format_text

__all__ = [
	"ResultAggregator",
	"ResultPanel",
	"aggregation_map_clock_entry",
	"aggregation_map_clocks_payload",
	"aggregation_map_single_value",
	"result_build_panels",
	"result_format_age",
	"result_format_text",
]
