"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from .config import AppConfig, load_config, update_config
from .constants import VALID_DIALOG_BACKENDS
from .context import WorkingDirectoryProvider
from .errors import ExitCode, GitMenuError, user_facing_error
from .git import SubprocessGitService
from .hosts import ConfirmationHost
from .logging import configure_logging, default_log_path
from .menu import CommandID, GitMenuCommands
from .models import GitOperationResult
from .terminal import PtySession, PtyShellHost, relay_session

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

CommandsFactory = Callable[[argparse.Namespace, AppConfig], GitMenuCommands]


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gitmenu")
    parser.add_argument("--path", default=None, help="Working directory (default: current directory)")
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--dialogs", choices=sorted(VALID_DIALOG_BACKENDS), default=None)
    parser.add_argument("--log-level", type=_log_level_type, default="INFO")
    parser.add_argument("--log-file", type=Path, default=None)

    subcommands = parser.add_subparsers(dest="command", required=True)
    terminal = subcommands.add_parser("terminal", help="Open a shell in the working directory")
    terminal.add_argument("--cmd", default="", help="Command to run after changing directory")
    subcommands.add_parser("init", help="Initialize a git repository in the working directory")
    subcommands.add_parser("clone", help="Clone a remote repository into the working directory")
    subcommands.add_parser("ui", help="Activate the git panel of the notebook host")
    subcommands.add_parser("tutorial", help="Open the remotes tutorial in a browser")
    settings = subcommands.add_parser("config", help="Write settings to the config file")
    settings.add_argument("--dialog-backend", choices=sorted(VALID_DIALOG_BACKENDS), default=None)
    settings.add_argument("--git-executable", default=None)
    settings.add_argument("--clone-timeout", dest="git_clone_timeout_seconds", type=float, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def build_dialogs(backend: str) -> ConfirmationHost:
    if backend == "qt":
        from gitmenu.ui.qt import QtConfirmationHost

        return QtConfirmationHost()
    from gitmenu.ui.console import ConsoleConfirmationHost

    return ConsoleConfirmationHost()


def build_commands(namespace: argparse.Namespace, config: AppConfig) -> GitMenuCommands:
    return GitMenuCommands(
        path_provider=WorkingDirectoryProvider(namespace.path),
        shell_host=PtyShellHost(shell_command=config.shell_command or None),
        dialogs=build_dialogs(namespace.dialogs or config.dialog_backend),
        git_service=SubprocessGitService(
            git_executable=config.git_executable,
            init_timeout_seconds=config.git_init_timeout_seconds,
            clone_timeout_seconds=config.git_clone_timeout_seconds,
        ),
        config=config,
    )


def _result_exit_code(result: object) -> int:
    if isinstance(result, GitOperationResult) and not result.ok:
        return int(ExitCode.GIT_ERROR)
    return int(ExitCode.SUCCESS)


def write_config(namespace: argparse.Namespace, *, stdout: TextIO | None = None) -> int:
    path = update_config(
        namespace.config,
        dialog_backend=namespace.dialog_backend,
        git_executable=namespace.git_executable,
        git_clone_timeout_seconds=namespace.git_clone_timeout_seconds,
    )
    print(path, file=stdout or sys.stdout)
    return int(ExitCode.SUCCESS)


def run_command(
    namespace: argparse.Namespace,
    commands: GitMenuCommands,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    if namespace.command == "terminal":
        cmd = namespace.cmd.strip()
        command_id = CommandID.GIT_TERMINAL_COMMAND if cmd else CommandID.GIT_TERMINAL
        session = asyncio.run(commands.execute(command_id, {"cmd": cmd}))
        if session is None:
            return int(ExitCode.TERMINAL_ERROR)
        if isinstance(session, PtySession):
            relay_session(session, stdin=stdin or sys.stdin, stdout=stdout or sys.stdout)
        return int(ExitCode.SUCCESS)

    if namespace.command == "init":
        return _result_exit_code(asyncio.run(commands.execute(CommandID.GIT_INIT)))
    if namespace.command == "clone":
        return _result_exit_code(asyncio.run(commands.execute(CommandID.GIT_PROJECT)))

    if namespace.command == "ui":
        if not asyncio.run(commands.execute(CommandID.GIT_UI)):
            raise GitMenuError(
                "The git panel could not be activated.",
                code=ExitCode.UI_ERROR,
                hint="Open the git panel from the notebook host; the command line has no panel to show.",
            )
        return int(ExitCode.SUCCESS)

    opened = asyncio.run(commands.execute(CommandID.SETUP_REMOTES))
    return int(ExitCode.SUCCESS) if opened else int(ExitCode.RUNTIME_ERROR)


def main(
    argv: Sequence[str] | None = None,
    *,
    commands_factory: CommandsFactory | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
            return int(ExitCode.INVALID_ARGS)
        return int(ExitCode.SUCCESS)

    if namespace.log_file is not None:
        log_path = namespace.log_file.expanduser()
    logger = configure_logging(level=namespace.log_level, log_file=log_path)

    try:
        if namespace.command == "config":
            return write_config(namespace)
        config = load_config(namespace.config)
        factory = commands_factory or build_commands
        commands = factory(namespace, config)
        logger.debug("Running command %s", namespace.command)
        return run_command(namespace, commands)
    except GitMenuError as exc:
        logger.error(
            "Handled GitMenuError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return int(ExitCode.SUCCESS)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
