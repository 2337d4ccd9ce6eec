"""Open an interactive shell and type a composed command into it."""

from __future__ import annotations

import asyncio
import logging as py_logging
from collections.abc import Mapping

from gitmenu.commands import compose_shell_command
from gitmenu.constants import SESSION_CREATE_TIMEOUT_SECONDS
from gitmenu.context import PathContextProvider, resolve_current_path
from gitmenu.errors import ExitCode, GitMenuError
from gitmenu.hosts import ShellHost, ShellSession

logger = py_logging.getLogger(__name__)


class TerminalLaunchWorkflow:
    def __init__(
        self,
        *,
        shell_host: ShellHost,
        path_provider: PathContextProvider,
        session_timeout_seconds: float = SESSION_CREATE_TIMEOUT_SECONDS,
    ) -> None:
        self._shell_host = shell_host
        self._path_provider = path_provider
        self.session_timeout_seconds = session_timeout_seconds

    async def launch(
        self,
        path: str | None = None,
        trailing_command: str | None = None,
        *,
        args: Mapping[str, str] | None = None,
    ) -> ShellSession | None:
        """Create a session and send ``cd "<path>"&&<command>`` as its first line.

        Session creation failures raise :class:`GitMenuError`. When the first line
        cannot be delivered the session is disposed and ``None`` is returned; the
        caller owns the session otherwise.
        """
        resolved = resolve_current_path(self._path_provider) if path is None else path
        line = compose_shell_command(resolved, trailing_command) + "\n"
        session = await self._create_session(dict(args or {}))

        try:
            session.send_input(line)
        except Exception:
            logger.error("terminal-launch input delivery failed; disposing session", exc_info=True)
            try:
                session.dispose()
            except Exception:
                logger.debug("terminal-launch dispose after failed input raised", exc_info=True)
            return None

        logger.info("terminal-launch started cwd=%s command=%s", resolved or "-", trailing_command or "-")
        return session

    async def _create_session(self, args: dict[str, str]) -> ShellSession:
        try:
            return await asyncio.wait_for(
                self._shell_host.create_session(args),
                timeout=self.session_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise GitMenuError(
                "Timed out while opening a terminal session.",
                code=ExitCode.TERMINAL_ERROR,
                hint=f"The shell did not start within {self.session_timeout_seconds:g}s.",
            ) from exc
        except GitMenuError:
            raise
        except Exception as exc:
            raise GitMenuError(
                "Failed to open a terminal session.",
                code=ExitCode.TERMINAL_ERROR,
                hint=str(exc) or "Check the configured shell command.",
            ) from exc
