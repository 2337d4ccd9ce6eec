"""Interactive shell sessions for terminal launches."""

from .pty_backend import PtySession, PtyShellHost, default_shell_command, relay_session

__all__ = [
    "default_shell_command",
    "PtySession",
    "PtyShellHost",
    "relay_session",
]
