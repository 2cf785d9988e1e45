"""Tests for runtime settings loading and validation."""

from __future__ import annotations

import pytest

from bioage.config import AppSettings, SettingsLoadError, config_load_settings
from bioage.domain import ProtocolProfile, ResultShape


def test_config_defaults_match_observed_backend_contract(monkeypatch: pytest.MonkeyPatch) -> None:
    """Default to the job-based multi-clock profile with unbounded 1 s polling.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate defaults.

    Raises:
        AssertionError: Raised when defaults drift.
    """

    monkeypatch.chdir("/")
    for name in ("BACKEND_BASE_URL", "PROTOCOL_PROFILE", "POLL_MAX_ATTEMPTS", "POLL_INTERVAL_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = config_load_settings()

    assert settings.backend_base_url == "http://localhost:8000"
    assert settings.protocol_profile is ProtocolProfile.JOB_CLOCKS
    assert settings.poll_interval_seconds == 1.0
    assert settings.poll_max_attempts is None
    assert settings.poll_max_duration_seconds is None
    assert settings.poll_not_ready_status_code == 400


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BACKEND_BASE_URL", "https://analysis.example.org/")
    monkeypatch.setenv("PROTOCOL_PROFILE", "sync_single_value")
    monkeypatch.setenv("POLL_MAX_ATTEMPTS", "30")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = config_load_settings()

    assert settings.backend_base_url == "https://analysis.example.org"
    assert settings.protocol_profile is ProtocolProfile.SYNC_SINGLE_VALUE
    assert settings.protocol_profile.uses_polling is False
    assert settings.protocol_profile.result_shape is ResultShape.SINGLE_VALUE
    assert settings.poll_max_attempts == 30
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("BACKEND_BASE_URL", "ftp://backend"),
        ("BACKEND_BASE_URL", "   "),
        ("PROTOCOL_PROFILE", "auto"),
        ("POLL_INTERVAL_SECONDS", "0"),
        ("POLL_MAX_ATTEMPTS", "0"),
        ("RESULT_PATH_TEMPLATE", "/api/samples/result"),
        ("LOG_LEVEL", "chatty"),
    ],
)
def test_config_invalid_values_raise_settings_load_error(
    monkeypatch: pytest.MonkeyPatch,
    name: str,
    value: str,
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(SettingsLoadError):
        config_load_settings()


def test_config_accepts_direct_overrides() -> None:
    settings = AppSettings(protocol_profile="job_single_value", poll_max_duration_seconds=120)

    assert settings.protocol_profile is ProtocolProfile.JOB_SINGLE_VALUE
    assert settings.poll_max_duration_seconds == 120.0
