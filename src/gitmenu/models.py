"""Value objects passed between workflows and their collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class GitOperationResult:
    """Outcome of a git-service call. ``code == 0`` is success."""

    code: int
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0


class WorkflowState(str, Enum):
    IDLE = "idle"
    AWAITING_CONFIRMATION = "awaiting-confirmation"
    AWAITING_NAME_INPUT = "awaiting-name-input"
    CANCELLED = "cancelled"
    INITIALIZING = "initializing"
    CLONING = "cloning"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    REPORTING_ERROR = "reporting-error"
    DONE = "done"


@dataclass(frozen=True)
class WorkflowEvent:
    workflow: str
    state: WorkflowState
    message: str
