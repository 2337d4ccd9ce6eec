from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager

import pytest

from gitmenu.config import AppConfig
from gitmenu.errors import ExitCode, GitMenuError
from gitmenu.menu import COMMAND_SPECS, CommandID, GitMenuCommands
from gitmenu.models import GitOperationResult


class _StaticPath:
    def __init__(self, path: str) -> None:
        self.path = path

    def current_path(self) -> str | None:
        return self.path


class _Session:
    def __init__(self) -> None:
        self.sent: list[str] = []

    def send_input(self, line: str) -> None:
        self.sent.append(line)

    def dispose(self) -> None:
        return None


class _ShellHost:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.error = error
        self.sessions: list[_Session] = []
        self.args: list[Mapping[str, str]] = []

    async def create_session(self, args: Mapping[str, str]) -> _Session:
        self.args.append(args)
        if self.error is not None:
            raise self.error
        session = _Session()
        self.sessions.append(session)
        return session


class _Dialog:
    def __init__(self, value: str | None) -> None:
        self.value = value

    async def launch(self) -> str | None:
        return self.value


class _Dialogs:
    def __init__(self, *, confirm: bool = True, value: str | None = None) -> None:
        self.confirm_answer = confirm
        self.value = value
        self.messages: list[tuple[str, str]] = []

    async def confirm(self, title: str, body: str, *, accept_label: str) -> bool:
        return self.confirm_answer

    @asynccontextmanager
    async def input_dialog(self, title: str, label: str, *, accept_label: str) -> AsyncIterator[_Dialog]:
        yield _Dialog(self.value)

    async def show_message(self, title: str, body: str, *, dismiss_label: str) -> None:
        self.messages.append((title, body))


class _Git:
    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []

    async def init(self, path: str) -> GitOperationResult:
        self.calls.append(("init", path))
        return GitOperationResult(code=0)

    async def clone(self, path: str, name: str) -> GitOperationResult:
        self.calls.append(("clone", path, name))
        return GitOperationResult(code=0)


class _Activator:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.activated: list[str] = []

    def activate_by_id(self, panel_id: str) -> None:
        if self.fail:
            raise KeyError(panel_id)
        self.activated.append(panel_id)


def _commands(**overrides: object) -> GitMenuCommands:
    params: dict[str, object] = {
        "path_provider": _StaticPath("/work/repo"),
        "shell_host": _ShellHost(),
        "dialogs": _Dialogs(),
        "git_service": _Git(),
    }
    params.update(overrides)
    return GitMenuCommands(**params)  # type: ignore[arg-type]


def test_command_specs_cover_every_command() -> None:
    commands = _commands()

    listed = commands.list_commands()

    assert [spec.command_id for spec in listed] == list(CommandID)
    assert COMMAND_SPECS[CommandID.GIT_TERMINAL].label == "Open Terminal"
    assert CommandID.GIT_TERMINAL_COMMAND.value == "git:terminal-command"


@pytest.mark.asyncio
async def test_terminal_command_runs_cmd_in_current_directory() -> None:
    shell = _ShellHost()
    commands = _commands(shell_host=shell)

    session = await commands.execute("git:terminal-command", {"cmd": "git status"})

    assert session is shell.sessions[0]
    assert shell.sessions[0].sent == ['cd "/work/repo"&&git status\n']


@pytest.mark.asyncio
async def test_open_terminal_only_changes_directory() -> None:
    shell = _ShellHost()

    await _commands(shell_host=shell).execute(CommandID.GIT_TERMINAL)

    assert shell.sessions[0].sent == ['cd "/work/repo"\n']


@pytest.mark.asyncio
async def test_init_and_project_dispatch_to_git_service() -> None:
    git = _Git()
    commands = _commands(git_service=git, dialogs=_Dialogs(confirm=True, value="https://h/r.git"))

    await commands.execute(CommandID.GIT_INIT)
    await commands.execute(CommandID.GIT_PROJECT)

    assert git.calls == [("init", "/work/repo"), ("clone", "/work/repo", "https%3A%2F%2Fh%2Fr.git")]
    assert [event.workflow for event in commands.events.list_events()][0] == "init"


@pytest.mark.asyncio
async def test_git_ui_activates_configured_panel() -> None:
    activator = _Activator()
    commands = _commands(panel_activator=activator, config=AppConfig(git_panel_id="git-side"))

    assert await commands.execute(CommandID.GIT_UI) is True
    assert activator.activated == ["git-side"]


@pytest.mark.asyncio
async def test_git_ui_activation_errors_are_swallowed() -> None:
    commands = _commands(panel_activator=_Activator(fail=True))

    assert await commands.execute(CommandID.GIT_UI) is False
    assert await _commands().execute(CommandID.GIT_UI) is False


@pytest.mark.asyncio
async def test_setup_remotes_opens_tutorial_url() -> None:
    opened: list[str] = []
    commands = _commands(url_opener=opened.append, config=AppConfig(remotes_tutorial_url="https://docs.example/remotes"))

    assert await commands.execute(CommandID.SETUP_REMOTES) is True
    assert opened == ["https://docs.example/remotes"]


@pytest.mark.asyncio
async def test_unknown_command_is_a_validation_error() -> None:
    with pytest.raises(GitMenuError) as exc:
        await _commands().execute("git:push")

    assert exc.value.code == ExitCode.VALIDATION_ERROR


@pytest.mark.asyncio
async def test_execute_propagates_session_failure_but_trigger_absorbs_it() -> None:
    commands = _commands(shell_host=_ShellHost(error=RuntimeError("no pty")))

    with pytest.raises(GitMenuError):
        await commands.execute(CommandID.GIT_TERMINAL)

    assert await commands.trigger(CommandID.GIT_TERMINAL) is None


@pytest.mark.asyncio
async def test_config_timeouts_flow_into_workflows() -> None:
    config = AppConfig(session_create_timeout_seconds=3, git_init_timeout_seconds=4, git_clone_timeout_seconds=5)

    commands = _commands(config=config)

    assert commands.terminal.session_timeout_seconds == 3
    assert commands.repository_init.timeout_seconds == 4
    assert commands.project_clone.timeout_seconds == 5


class _RaisingDialogs(_Dialogs):
    async def confirm(self, title: str, body: str, *, accept_label: str) -> bool:
        raise RuntimeError("dialog host crashed")


@pytest.mark.asyncio
async def test_trigger_absorbs_confirmation_host_failure() -> None:
    git = _Git()
    commands = _commands(dialogs=_RaisingDialogs(), git_service=git)

    with pytest.raises(RuntimeError):
        await commands.execute(CommandID.GIT_INIT)

    assert await commands.trigger(CommandID.GIT_INIT) is None
    assert git.calls == []


class _PanelWidget:
    def __init__(self, widget_id: str, path: str) -> None:
        self.id = widget_id
        self.path = path


@pytest.mark.asyncio
async def test_for_widgets_reads_configured_file_browser() -> None:
    shell = _ShellHost()
    widgets = [_PanelWidget("filebrowser", "/default"), _PanelWidget("browser-main", "/work/notes")]
    commands = GitMenuCommands.for_widgets(
        lambda: widgets,
        shell_host=shell,
        dialogs=_Dialogs(),
        git_service=_Git(),
        config=AppConfig(file_browser_widget_id="browser-main"),
    )

    await commands.execute(CommandID.GIT_TERMINAL)

    assert shell.sessions[0].sent == ['cd "/work/notes"\n']
    assert commands.config.file_browser_widget_id == "browser-main"
