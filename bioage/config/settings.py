"""Typed runtime settings with dotenv support and startup validation."""

from __future__ import annotations

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bioage.domain import ProtocolProfile


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for the analysis client and its HTTP surface.

    Environment variable names map directly to field names in uppercase.
    Example: `backend_base_url` reads from `BACKEND_BASE_URL`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        backend_base_url: Base URL of the remote analysis service.
        protocol_profile: Backend contract in force for this deployment.
        upload_path: Upload endpoint path for job-based profiles.
        result_path_template: Per-job result endpoint path, must contain `{job_id}`.
        sync_path: Single-request endpoint path for the synchronous profile.
        poll_interval_seconds: Fixed wait between not-ready poll responses.
        poll_max_attempts: Optional poll attempt cap; None polls without bound.
        poll_max_duration_seconds: Optional poll duration cap; None polls without bound.
        poll_not_ready_status_code: HTTP status the backend uses for "not ready yet".
        request_timeout_seconds: HTTP request timeout in seconds.
        notification_history_limit: Notifications retained by the in-memory sink.
        log_level: Root logging level for CLI and API runtimes.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="127.0.0.1")
    application_port: int = Field(default=8080, ge=1, le=65535)
    backend_base_url: str = Field(default="http://localhost:8000")
    protocol_profile: ProtocolProfile = Field(default=ProtocolProfile.JOB_CLOCKS)
    upload_path: str = Field(default="/api/upload")
    result_path_template: str = Field(default="/api/samples/{job_id}/result")
    sync_path: str = Field(default="/getbioage")
    poll_interval_seconds: float = Field(default=1.0, gt=0)
    poll_max_attempts: int | None = Field(default=None, ge=1)
    poll_max_duration_seconds: float | None = Field(default=None, gt=0)
    poll_not_ready_status_code: int = Field(default=400, ge=100, le=599)
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    notification_history_limit: int = Field(default=50, ge=1)
    log_level: str = Field(default="INFO")

    @field_validator("backend_base_url", "upload_path", "sync_path", "result_path_template")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("backend_base_url")
    @classmethod
    def _validate_base_url_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("backend_base_url must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("result_path_template")
    @classmethod
    def _validate_result_template(cls, value: str) -> str:
        if "{job_id}" not in value:
            raise ValueError("result_path_template must contain the {job_id} placeholder")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
