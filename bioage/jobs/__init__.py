"""Job layer package for workflow orchestration boundaries."""

from .interfaces import WorkflowBusyError, WorkflowControllerConfig
from .workflow_controller import WorkflowController

__all__ = ["WorkflowBusyError", "WorkflowController", "WorkflowControllerConfig"]
