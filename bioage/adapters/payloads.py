"""Pydantic wire models for analysis service response bodies.

Models here only describe what the backend sends; the aggregation layer maps
validated payloads onto domain models.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr, model_validator


class _WirePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, allow_inf_nan=False)


class UploadResponsePayload(_WirePayload):
    """Upload acknowledgement carrying the job identifier."""

    id: StrictStr = Field(min_length=1)


class ClockEntryPayload(_WirePayload):
    """One clock entry: either a failure with `error`, or a full prediction."""

    predicted_age: float | None = Field(default=None, strict=True)
    std_predicted_age: float | None = Field(default=None, strict=True)
    num_samples: StrictInt | None = None
    error: StrictStr | None = None

    @model_validator(mode="after")
    def _validate_success_or_error(self) -> "ClockEntryPayload":
        if self.error is not None:
            return self
        missing_fields = [
            field_name
            for field_name in ("predicted_age", "std_predicted_age", "num_samples")
            if getattr(self, field_name) is None
        ]
        if missing_fields:
            raise ValueError(f"clock entry without error is missing fields: {', '.join(missing_fields)}")
        return self


class ProcessingConfigPayload(_WirePayload):
    imputation_strategy: StrictStr
    normalize_data: StrictBool


class ClocksResultPayload(_WirePayload):
    """Multi-clock terminal result body."""

    clocks: dict[str, ClockEntryPayload]
    total_sites_used: StrictInt
    config: ProcessingConfigPayload


class SingleValueResultPayload(_WirePayload):
    """Single-value terminal result body returned by the job endpoint."""

    predicted_age: float = Field(strict=True)


class SyncAgeResponsePayload(_WirePayload):
    """Synchronous single-request response body."""

    bio_age: float = Field(alias="bioAge", strict=True)


RawResult = Union[ClocksResultPayload, SingleValueResultPayload, SyncAgeResponsePayload]
