"""Shell command composition for terminal launches."""

from __future__ import annotations

CHANGE_DIRECTORY_SEPARATOR = "&&"


def is_unresolved_path(path: str | None) -> bool:
    """Blank and whitespace-only paths carry no directory context."""
    return path is None or not path.strip()


def escape_double_quotes(path: str) -> str:
    return path.replace('"', '\\"')


def change_directory_command(path: str | None) -> str:
    if path is None or is_unresolved_path(path):
        return ""
    return f'cd "{escape_double_quotes(path)}"'


def compose_shell_command(path: str | None, trailing_command: str | None = None) -> str:
    """Build a single shell line: ``cd "<path>"&&<command>``.

    Either half may be missing, in which case the other is returned alone and no
    separator is emitted. The result carries no trailing newline.
    """
    prefix = change_directory_command(path)
    command = trailing_command or ""
    if prefix and command:
        return f"{prefix}{CHANGE_DIRECTORY_SEPARATOR}{command}"
    return prefix or command
