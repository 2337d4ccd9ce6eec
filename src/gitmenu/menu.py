"""Git menu command set: ids, labels and dispatch to workflows."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from gitmenu.config import AppConfig
from gitmenu.context import FileBrowserPathProvider, PathContextProvider
from gitmenu.errors import ExitCode, GitMenuError
from gitmenu.hosts import ConfirmationHost, GitService, PanelActivator, ShellHost, UrlOpener
from gitmenu.workflows import (
    EventLog,
    ProjectCloneWorkflow,
    RepositoryInitWorkflow,
    TerminalLaunchWorkflow,
    activate_git_panel,
    open_tutorial,
)

logger = py_logging.getLogger(__name__)


class CommandID(str, Enum):
    GIT_UI = "git:ui"
    GIT_TERMINAL = "git:create-new-terminal"
    GIT_TERMINAL_COMMAND = "git:terminal-command"
    GIT_INIT = "git:init"
    GIT_PROJECT = "git:project"
    SETUP_REMOTES = "git:tutorial-remotes"


@dataclass(frozen=True)
class CommandSpec:
    command_id: CommandID
    label: str
    caption: str


COMMAND_SPECS: dict[CommandID, CommandSpec] = {
    spec.command_id: spec
    for spec in (
        CommandSpec(CommandID.GIT_UI, "Git Interface", "Go to Git user interface"),
        CommandSpec(
            CommandID.GIT_TERMINAL,
            "Open Terminal",
            "Start a new terminal session to directly use git command",
        ),
        CommandSpec(
            CommandID.GIT_TERMINAL_COMMAND,
            "Terminal Command",
            "Open a new terminal session and perform git command",
        ),
        CommandSpec(
            CommandID.GIT_INIT,
            "Init",
            "Create an empty Git repository or reinitialize an existing one",
        ),
        CommandSpec(CommandID.GIT_PROJECT, "Project", "Clone a remote repository into this directory"),
        CommandSpec(CommandID.SETUP_REMOTES, "Set Up Remotes", "Learn about Remotes"),
    )
}


def _normalize_command_id(value: CommandID | str) -> CommandID:
    if isinstance(value, CommandID):
        return value
    try:
        return CommandID(str(value).strip())
    except ValueError as exc:
        raise GitMenuError(
            f"Unknown command: {value}",
            code=ExitCode.VALIDATION_ERROR,
            hint="Use one of: " + ", ".join(item.value for item in CommandID),
        ) from exc


class GitMenuCommands:
    """Workflows wired to one set of collaborators.

    ``execute`` lets errors reach its caller; ``trigger`` is the entry point for
    UI actions and logs every failure instead of raising it.
    """

    def __init__(
        self,
        *,
        path_provider: PathContextProvider,
        shell_host: ShellHost,
        dialogs: ConfirmationHost,
        git_service: GitService,
        panel_activator: PanelActivator | None = None,
        url_opener: UrlOpener | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.events = EventLog()
        self._panel_activator = panel_activator
        self._url_opener = url_opener
        self.terminal = TerminalLaunchWorkflow(
            shell_host=shell_host,
            path_provider=path_provider,
            session_timeout_seconds=self.config.session_create_timeout_seconds,
        )
        self.repository_init = RepositoryInitWorkflow(
            dialogs=dialogs,
            git_service=git_service,
            path_provider=path_provider,
            timeout_seconds=self.config.git_init_timeout_seconds,
            events=self.events,
        )
        self.project_clone = ProjectCloneWorkflow(
            dialogs=dialogs,
            git_service=git_service,
            path_provider=path_provider,
            timeout_seconds=self.config.git_clone_timeout_seconds,
            events=self.events,
        )

    @classmethod
    def for_widgets(
        cls,
        widgets: Callable[[], Iterable[object]],
        *,
        shell_host: ShellHost,
        dialogs: ConfirmationHost,
        git_service: GitService,
        panel_activator: PanelActivator | None = None,
        url_opener: UrlOpener | None = None,
        config: AppConfig | None = None,
    ) -> GitMenuCommands:
        """Build the command set for a notebook host whose side panel lists ``widgets``."""
        resolved = config or AppConfig()
        return cls(
            path_provider=FileBrowserPathProvider(widgets, widget_id=resolved.file_browser_widget_id),
            shell_host=shell_host,
            dialogs=dialogs,
            git_service=git_service,
            panel_activator=panel_activator,
            url_opener=url_opener,
            config=resolved,
        )

    def list_commands(self) -> list[CommandSpec]:
        return [COMMAND_SPECS[command_id] for command_id in CommandID]

    async def execute(
        self,
        command_id: CommandID | str,
        args: Mapping[str, str] | None = None,
    ) -> object:
        resolved = _normalize_command_id(command_id)
        payload = dict(args or {})
        logger.debug("menu-command id=%s args=%s", resolved.value, sorted(payload))

        if resolved == CommandID.GIT_TERMINAL:
            return await self.terminal.launch(args=payload)
        if resolved == CommandID.GIT_TERMINAL_COMMAND:
            return await self.terminal.launch(trailing_command=payload.get("cmd", ""), args=payload)
        if resolved == CommandID.GIT_INIT:
            return await self.repository_init.init()
        if resolved == CommandID.GIT_PROJECT:
            return await self.project_clone.clone_project()
        if resolved == CommandID.GIT_UI:
            return activate_git_panel(self._panel_activator, self.config.git_panel_id)
        return open_tutorial(self.config.remotes_tutorial_url, self._url_opener)

    async def trigger(
        self,
        command_id: CommandID | str,
        args: Mapping[str, str] | None = None,
    ) -> object:
        try:
            return await self.execute(command_id, args)
        except GitMenuError as exc:
            logger.error(
                "Handled GitMenuError in command %s (code=%s): %s",
                command_id,
                int(exc.code),
                exc.message,
                exc_info=logger.isEnabledFor(py_logging.DEBUG),
            )
            return None
        except Exception:
            logger.exception("Unhandled failure in command %s", command_id)
            return None
