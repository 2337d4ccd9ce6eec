"""User-triggered git workflows."""

from .events import EventLog
from .navigation import activate_git_panel, open_tutorial
from .repository import ProjectCloneWorkflow, RepositoryInitWorkflow, encode_project_name
from .terminal import TerminalLaunchWorkflow

__all__ = [
    "activate_git_panel",
    "encode_project_name",
    "EventLog",
    "open_tutorial",
    "ProjectCloneWorkflow",
    "RepositoryInitWorkflow",
    "TerminalLaunchWorkflow",
]
