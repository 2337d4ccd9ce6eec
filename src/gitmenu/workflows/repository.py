"""Confirmation-gated repository init and clone workflows."""

from __future__ import annotations

import asyncio
import logging as py_logging
from collections.abc import Awaitable
from urllib.parse import quote

from gitmenu.constants import (
    CLONE_ACCEPT_LABEL,
    CLONE_FAILED_TITLE,
    CLONE_LABEL,
    CLONE_TITLE,
    DISMISS_LABEL,
    GIT_CLONE_TIMEOUT_SECONDS,
    GIT_INIT_TIMEOUT_SECONDS,
    INIT_ACCEPT_LABEL,
    INIT_BODY,
    INIT_FAILED_TITLE,
    INIT_TITLE,
)
from gitmenu.context import PathContextProvider, resolve_current_path
from gitmenu.hosts import ConfirmationHost, GitService
from gitmenu.models import GitOperationResult, WorkflowState
from gitmenu.security import sanitize_log_text
from gitmenu.workflows.events import EventLog

logger = py_logging.getLogger(__name__)

# encodeURIComponent leaves these unescaped in addition to letters, digits and "-_.~".
_URI_COMPONENT_SAFE = "!*'()"


def encode_project_name(value: str) -> str:
    """Percent-encode a clone URI as a single URI component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


async def _call_git(
    operation: str,
    call: Awaitable[GitOperationResult],
    *,
    timeout: float | None,
) -> GitOperationResult:
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError:
        message = f"git {operation} timed out after {timeout:g}s"
        logger.warning("git-call op=%s %s", operation, message)
        return GitOperationResult(code=-1, message=message)
    except Exception as exc:
        logger.error("git-call op=%s raised", operation, exc_info=True)
        return GitOperationResult(code=-1, message=str(exc) or f"git {operation} failed")


class RepositoryInitWorkflow:
    name = "init"

    def __init__(
        self,
        *,
        dialogs: ConfirmationHost,
        git_service: GitService,
        path_provider: PathContextProvider,
        timeout_seconds: float | None = GIT_INIT_TIMEOUT_SECONDS,
        events: EventLog | None = None,
    ) -> None:
        self._dialogs = dialogs
        self._git_service = git_service
        self._path_provider = path_provider
        self.timeout_seconds = timeout_seconds
        self.events = events or EventLog()

    async def init(self, path: str | None = None) -> GitOperationResult | None:
        """Ask before running ``git init``; returns ``None`` when the user declines."""
        resolved = resolve_current_path(self._path_provider) if path is None else path
        self.events.record(self.name, WorkflowState.IDLE, resolved)
        self.events.record(self.name, WorkflowState.AWAITING_CONFIRMATION)
        accepted = await self._dialogs.confirm(INIT_TITLE, INIT_BODY, accept_label=INIT_ACCEPT_LABEL)
        if not accepted:
            self.events.record(self.name, WorkflowState.CANCELLED)
            return None

        self.events.record(self.name, WorkflowState.INITIALIZING, resolved)
        result = await _call_git("init", self._git_service.init(resolved), timeout=self.timeout_seconds)
        if not result.ok:
            self.events.record(self.name, WorkflowState.REPORTING_ERROR, sanitize_log_text(result.message))
            await self._dialogs.show_message(INIT_FAILED_TITLE, result.message, dismiss_label=DISMISS_LABEL)
        self.events.record(self.name, WorkflowState.DONE, f"code={result.code}")
        return result


class ProjectCloneWorkflow:
    name = "clone"

    def __init__(
        self,
        *,
        dialogs: ConfirmationHost,
        git_service: GitService,
        path_provider: PathContextProvider,
        timeout_seconds: float | None = GIT_CLONE_TIMEOUT_SECONDS,
        events: EventLog | None = None,
    ) -> None:
        self._dialogs = dialogs
        self._git_service = git_service
        self._path_provider = path_provider
        self.timeout_seconds = timeout_seconds
        self.events = events or EventLog()

    async def clone_project(self, path: str | None = None) -> GitOperationResult | None:
        """Prompt for a clone URI and clone it into ``path``.

        An empty or cancelled prompt is a no-op. Failures are shown in a dismissible
        dialog; success is silent.
        """
        resolved = resolve_current_path(self._path_provider) if path is None else path
        self.events.record(self.name, WorkflowState.IDLE, resolved)
        self.events.record(self.name, WorkflowState.AWAITING_NAME_INPUT)
        async with self._dialogs.input_dialog(
            CLONE_TITLE,
            CLONE_LABEL,
            accept_label=CLONE_ACCEPT_LABEL,
        ) as dialog:
            value = await dialog.launch()

        if not value:
            self.events.record(self.name, WorkflowState.CANCELLED)
            return None

        project_name = encode_project_name(value)
        self.events.record(self.name, WorkflowState.CLONING, sanitize_log_text(value))
        result = await _call_git(
            "clone",
            self._git_service.clone(resolved, project_name),
            timeout=self.timeout_seconds,
        )
        if result.ok:
            self.events.record(self.name, WorkflowState.SUCCEEDED)
            return result

        self.events.record(self.name, WorkflowState.FAILED, sanitize_log_text(result.message))
        self.events.record(self.name, WorkflowState.REPORTING_ERROR)
        await self._dialogs.show_message(CLONE_FAILED_TITLE, result.message, dismiss_label=DISMISS_LABEL)
        return result
