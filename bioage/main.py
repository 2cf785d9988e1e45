"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either runs one submission
from the command line or launches the FastAPI service.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from pathlib import Path

import uvicorn

from bioage.aggregation import result_format_text
from bioage.bootstrap import bootstrap_create_application, bootstrap_create_workflow_controller
from bioage.config import AppSettings, config_load_settings
from bioage.domain import CandidateFile, Failed, Succeeded, WorkflowState, WorkflowStatus
from bioage.notifications import LoggingNotificationSink

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list, `sys.argv[1:]` when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when a submission ends in Failed.
    """

    argument_parser = argparse.ArgumentParser(description="Biological age calculator runtime entrypoint")
    subparsers = argument_parser.add_subparsers(dest="command")
    submit_parser = subparsers.add_parser("submit", help="Submit one CSV file and wait for the result")
    submit_parser.add_argument("paths", nargs="+", type=Path, help="CSV file to analyse (exactly one is accepted)")
    subparsers.add_parser("api", help="Start the workflow HTTP service")
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if parsed_arguments.command == "submit":
        final_state = asyncio.run(main_submit_files(settings=settings, paths=parsed_arguments.paths))
        if isinstance(final_state, Succeeded):
            print(result_format_text(final_state.result))
            return
        if isinstance(final_state, Failed):
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_read_candidate_files(paths: list[Path]) -> list[CandidateFile]:
    """Read command-line paths into candidate files.

    Args:
        paths: Paths given on the command line.

    Returns:
        list[CandidateFile]: One candidate per path, in argument order.

    Raises:
        OSError: Raised when a file cannot be read.
    """

    return [CandidateFile(name=path.name, content=path.read_bytes()) for path in paths]


async def main_submit_files(settings: AppSettings, paths: list[Path]) -> WorkflowState:
    """Run one submission to completion, cancelling cleanly on Ctrl+C.

    Args:
        settings: Validated runtime settings.
        paths: Paths given on the command line.

    Returns:
        WorkflowState: Final workflow state.
    """

    controller = bootstrap_create_workflow_controller(settings=settings, notification_sink=LoggingNotificationSink())
    candidates = main_read_candidate_files(paths)

    loop = asyncio.get_running_loop()
    handler_installed = True
    try:
        loop.add_signal_handler(signal.SIGINT, controller.workflow_cancel)
    except (NotImplementedError, RuntimeError):
        handler_installed = False
        logger.debug("Signal handlers unavailable; Ctrl+C will not cancel cleanly")

    try:
        final_state = await controller.workflow_submit(candidates)
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)

    if final_state.status is WorkflowStatus.IDLE:
        logger.info("Submission cancelled")
    return final_state


if __name__ == "__main__":
    main()
