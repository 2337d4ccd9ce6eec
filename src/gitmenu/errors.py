"""Error type shared by workflows and the CLI, and the process exit codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Exit status of the ``gitmenu`` command.

    ``INVALID_ARGS`` keeps argparse's usage-error status. ``GIT_ERROR`` is a git
    run that finished with a non-zero code; git failing to start is reported the
    same way.
    """

    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    GIT_ERROR = 5
    TERMINAL_ERROR = 6
    VALIDATION_ERROR = 7
    UI_ERROR = 8


@dataclass
class GitMenuError(Exception):
    """Failure a menu command cannot recover from.

    Workflows raise it for terminal and dialog-host failures; git failures are
    results, not errors.
    """

    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if not self.hint:
            return self.message
        return f"{self.message} Hint: {self.hint}"


def user_facing_error(message: str, *, hint: str = "") -> str:
    text = f"Error: {message.rstrip('.')}."
    if hint:
        return f"{text} Next step: {hint}"
    return text
