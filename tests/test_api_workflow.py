"""Tests for workflow and health API endpoint behavior.

These tests drive the FastAPI surface against a scripted analysis backend
served through httpx.MockTransport.
"""

from __future__ import annotations

import time

import httpx
from fastapi.testclient import TestClient

from bioage.api import create_api_application
from bioage.bootstrap import bootstrap_create_workflow_controller
from bioage.config import AppSettings
from bioage.notifications import InMemoryNotificationSink

_CSV_UPLOAD = ("files", ("sample.csv", b"site,value\ncg1,0.5\n", "text/csv"))

_CLOCKS_BODY = {
    "clocks": {
        "horvath": {"predicted_age": 55.2, "std_predicted_age": 3.1, "num_samples": 300},
        "hannum": {"error": "insufficient sites"},
    },
    "total_sites_used": 12000,
    "config": {"imputation_strategy": "mean", "normalize_data": True},
}


def _build_client(handler, **settings_overrides: object) -> TestClient:
    """Build a test client whose controller talks to `handler`.

    Args:
        handler: httpx mock transport handler standing in for the backend.
        settings_overrides: AppSettings field overrides.

    Returns:
        TestClient: Client for the assembled application.
    """

    settings = AppSettings(backend_base_url="http://backend.test", **settings_overrides)
    sink = InMemoryNotificationSink(history_limit=settings.notification_history_limit)
    controller = bootstrap_create_workflow_controller(
        settings=settings,
        notification_sink=sink,
        transport=httpx.MockTransport(handler),
    )
    return TestClient(create_api_application(settings=settings, controller=controller, notification_sink=sink))


def _wait_for_status(client: TestClient, expected_statuses: set[str]) -> dict[str, object]:
    """Poll the state endpoint until the workflow reaches one of the expected statuses.

    Args:
        client: Active test client.
        expected_statuses: Acceptable workflow statuses.

    Returns:
        dict[str, object]: State payload in an expected status.

    Raises:
        AssertionError: Raised when the status is not reached in time.
    """

    payload: dict[str, object] = {}
    for _ in range(500):
        payload = client.get("/workflow/state").json()
        if payload["status"] in expected_statuses:
            return payload
        time.sleep(0.01)
    raise AssertionError(f"workflow did not reach {expected_statuses}: {payload}")


def _clocks_backend(request: httpx.Request) -> httpx.Response:
    if request.method == "POST":
        return httpx.Response(200, json={"id": "abc"})
    return httpx.Response(200, json=_CLOCKS_BODY)


def test_api_submission_runs_to_succeeded_with_panels() -> None:
    """Accept one CSV, run the job in the background and expose result panels.

    Returns:
        None: Assertions validate response codes and state payload.

    Raises:
        AssertionError: Raised when API behavior differs.
    """

    with _build_client(_clocks_backend) as client:
        response = client.post("/workflow/submissions", files=[_CSV_UPLOAD])
        assert response.status_code == 202
        assert response.json()["status"] in {"uploading", "polling", "succeeded"}

        payload = _wait_for_status(client, {"succeeded", "failed"})
        notifications = client.get("/workflow/notifications").json()["items"]

    assert payload["status"] == "succeeded"
    assert payload["protocol_profile"] == "job_clocks"
    result = payload["result"]
    assert result["shape"] == "clocks"
    assert result["biological_age"] is None
    assert result["total_sites_used"] == 12000
    assert result["config"] == {"imputation_strategy": "mean", "normalize_data": True}
    assert [(panel["clock_name"], panel["succeeded"]) for panel in result["panels"]] == [
        ("hannum", False),
        ("horvath", True),
    ]
    assert [item["title"] for item in notifications] == ["Success"]


def test_api_invalid_file_type_fails_immediately() -> None:
    requests_seen: list[httpx.Request] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        return httpx.Response(500)

    with _build_client(_handler) as client:
        response = client.post(
            "/workflow/submissions",
            files=[("files", ("notes.txt", b"hello", "text/plain"))],
        )

    payload = response.json()
    assert response.status_code == 202
    assert payload["status"] == "failed"
    assert payload["failure"]["error_kind"] == "validation"
    assert payload["failure"]["error_type"] == "InvalidExtensionError"
    assert requests_seen == []


def test_api_multiple_files_fail_with_too_many_files() -> None:
    with _build_client(_clocks_backend) as client:
        response = client.post("/workflow/submissions", files=[_CSV_UPLOAD, _CSV_UPLOAD])

    assert response.json()["failure"]["error_type"] == "TooManyFilesError"


def test_api_busy_submission_conflicts_and_cancel_returns_to_idle() -> None:
    """Return 409 while a job polls, then cancel it without an error notification."""

    def _never_ready(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(200, json={"id": "abc"})
        return httpx.Response(400)

    with _build_client(_never_ready, poll_interval_seconds=60.0) as client:
        assert client.post("/workflow/submissions", files=[_CSV_UPLOAD]).status_code == 202

        conflict = client.post("/workflow/submissions", files=[_CSV_UPLOAD])
        polling_payload = _wait_for_status(client, {"polling"})
        cancel_response = client.post("/workflow/cancel")
        idle_payload = _wait_for_status(client, {"idle"})
        notifications = client.get("/workflow/notifications").json()["items"]

    assert conflict.status_code == 409
    assert conflict.json()["status"] == "error"
    assert polling_payload["job_id"] == "abc"
    assert cancel_response.json()["cancelled"] is True
    assert idle_payload["timeline"][-1]["status"] == "cancelled"
    assert [item["title"] for item in notifications] == ["Analysis in progress"]


def test_api_upload_failure_surfaces_failed_state() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500)

    with _build_client(_handler) as client:
        client.post("/workflow/submissions", files=[_CSV_UPLOAD])
        payload = _wait_for_status(client, {"failed"})

    assert payload["failure"]["error_kind"] == "status"
    assert payload["failure"]["error_type"] == "SubmitStatusError"


def test_api_health_and_index_report_profile() -> None:
    with _build_client(_clocks_backend, protocol_profile="job_single_value") as client:
        health = client.get("/health")
        index = client.get("/")
        cancel = client.post("/workflow/cancel")

    assert health.status_code == 200
    assert health.json() == {
        "status": "ok",
        "app": "up",
        "backend": "http://backend.test",
        "protocol_profile": "job_single_value",
        "workflow": "idle",
        "busy": False,
    }
    assert index.json()["protocol_profile"] == "job_single_value"
    assert cancel.json() == {"cancelled": False, "status": "idle"}
