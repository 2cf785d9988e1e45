"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from bioage.adapters import (
    AnalysisServiceHttpClient,
    JobSubmitter,
    PollRetryPolicy,
    ResultPoller,
    SyncAgeSubmitter,
)
from bioage.api import create_api_application
from bioage.config import AppSettings, config_load_settings
from bioage.jobs import WorkflowController, WorkflowControllerConfig
from bioage.notifications import InMemoryNotificationSink, NotificationSink


def bootstrap_create_workflow_controller(
    settings: AppSettings,
    notification_sink: NotificationSink,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WorkflowController:
    """Assemble adapters for the configured profile into one controller.

    Args:
        settings: Validated runtime settings.
        notification_sink: Sink receiving user-facing outcomes.
        transport: Optional httpx transport override, used by tests.

    Returns:
        WorkflowController: Controller wired for the active protocol profile.

    Raises:
        ValueError: Raised when settings produce invalid adapter config.
    """

    http_client = AnalysisServiceHttpClient(
        base_url=settings.backend_base_url,
        request_timeout_seconds=settings.request_timeout_seconds,
        transport=transport,
    )
    profile = settings.protocol_profile
    config = WorkflowControllerConfig(protocol_profile=profile)

    if not profile.uses_polling:
        return WorkflowController(
            config=config,
            notification_sink=notification_sink,
            sync_submitter=SyncAgeSubmitter(http_client=http_client, sync_path=settings.sync_path),
        )

    return WorkflowController(
        config=config,
        notification_sink=notification_sink,
        job_submitter=JobSubmitter(http_client=http_client, upload_path=settings.upload_path),
        result_poller=ResultPoller(
            http_client=http_client,
            result_shape=profile.result_shape,
            result_path_template=settings.result_path_template,
            retry_policy=PollRetryPolicy(
                interval_seconds=settings.poll_interval_seconds,
                max_attempts=settings.poll_max_attempts,
                max_duration_seconds=settings.poll_max_duration_seconds,
                not_ready_status_code=settings.poll_not_ready_status_code,
            ),
        ),
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the HTTP application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    notification_sink = InMemoryNotificationSink(history_limit=resolved_settings.notification_history_limit)
    controller = bootstrap_create_workflow_controller(
        settings=resolved_settings,
        notification_sink=notification_sink,
    )
    return create_api_application(
        settings=resolved_settings,
        controller=controller,
        notification_sink=notification_sink,
    )
