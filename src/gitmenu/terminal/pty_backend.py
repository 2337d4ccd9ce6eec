"""PTY-backed interactive shell sessions."""

from __future__ import annotations

import asyncio
import atexit
import itertools
import logging as py_logging
import os
import subprocess
import sys
import threading
from collections.abc import Callable, Mapping
from contextlib import suppress
from typing import TextIO

from gitmenu.constants import TERMINAL_READ_CHUNK_BYTES
from gitmenu.errors import ExitCode, GitMenuError

logger = py_logging.getLogger(__name__)

PtySpawn = Callable[[list[str], str | None, dict[str, str] | None], object]


def default_shell_command() -> list[str]:
    if sys.platform == "win32":
        return ["powershell.exe", "-NoLogo"]
    shell = os.environ.get("SHELL", "").strip() or "/bin/sh"
    return [shell, "-i"]


def _spawn_with_pywinpty(command: list[str], cwd: str | None, env: dict[str, str] | None) -> object:
    try:
        from winpty import PtyProcess
    except ImportError as exc:
        raise GitMenuError(
            "pywinpty backend is unavailable.",
            code=ExitCode.TERMINAL_ERROR,
            hint="Install pywinpty to open terminals on Windows.",
        ) from exc

    kwargs: dict[str, object] = {}
    if cwd:
        kwargs["cwd"] = cwd
    if env:
        kwargs["env"] = env
    return PtyProcess.spawn(subprocess.list2cmdline(command), **kwargs)


def _spawn_with_ptyprocess(command: list[str], cwd: str | None, env: dict[str, str] | None) -> object:
    try:
        from ptyprocess import PtyProcessUnicode
    except ImportError as exc:
        raise GitMenuError(
            "ptyprocess backend is unavailable.",
            code=ExitCode.TERMINAL_ERROR,
            hint="Install ptyprocess to open terminals.",
        ) from exc

    return PtyProcessUnicode.spawn(command, cwd=cwd or None, env=env)


def default_spawn() -> PtySpawn:
    if sys.platform == "win32":
        return _spawn_with_pywinpty
    return _spawn_with_ptyprocess


class PtySession:
    def __init__(
        self,
        session_id: str,
        process: object,
        command: tuple[str, ...],
        *,
        on_dispose: Callable[[str], None] | None = None,
    ) -> None:
        self.session_id = session_id
        self.command = command
        self._process = process
        self._disposed = False
        self._on_dispose = on_dispose

    @property
    def disposed(self) -> bool:
        return self._disposed

    def send_input(self, line: str) -> None:
        if self._disposed:
            raise GitMenuError(
                f"Terminal already closed: {self.session_id}",
                code=ExitCode.TERMINAL_ERROR,
                hint="Open a new terminal session.",
            )
        try:
            self._process.write(line)
        except Exception as exc:
            raise GitMenuError(
                f"Failed to write to terminal {self.session_id}.",
                code=ExitCode.TERMINAL_ERROR,
                hint=str(exc) or "Verify terminal process health.",
            ) from exc

    def read(self, *, max_bytes: int = TERMINAL_READ_CHUNK_BYTES) -> str:
        """Return the next output chunk, or ``""`` once the shell has exited."""
        if self._disposed:
            return ""
        try:
            chunk = self._process.read(max_bytes)
        except EOFError:
            return ""
        except Exception as exc:
            raise GitMenuError(
                f"Failed to read from terminal {self.session_id}.",
                code=ExitCode.TERMINAL_ERROR,
                hint=str(exc) or "Verify PTY stream state.",
            ) from exc
        if chunk is None:
            return ""
        if isinstance(chunk, bytes):
            return chunk.decode("utf-8", errors="replace")
        return str(chunk)

    def is_alive(self) -> bool:
        if self._disposed:
            return False
        return _is_alive(self._process)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        _close_process(self._process)
        if self._on_dispose is not None:
            self._on_dispose(self.session_id)
        logger.info("terminal-event session=%s step=dispose", self.session_id)


class PtyShellHost:
    """Spawn interactive shells on a pseudo-terminal.

    ``args`` passed to :meth:`create_session` may carry ``cwd``; other keys are
    ignored. Sessions still open at interpreter exit are closed.
    """

    def __init__(
        self,
        *,
        shell_command: list[str] | None = None,
        spawn: PtySpawn | None = None,
    ) -> None:
        self._shell_command = list(shell_command) if shell_command else default_shell_command()
        self._spawn = spawn or default_spawn()
        self._sessions: dict[str, PtySession] = {}
        self._ids = itertools.count(1)
        atexit.register(self.dispose_all)

    @property
    def shell_command(self) -> list[str]:
        return list(self._shell_command)

    async def create_session(self, args: Mapping[str, str]) -> PtySession:
        cwd = str(args.get("cwd", "")).strip() or None
        command = list(self._shell_command)
        try:
            process = await asyncio.to_thread(self._spawn, command, cwd, None)
        except GitMenuError:
            raise
        except Exception as exc:
            raise GitMenuError(
                "Failed to start terminal process.",
                code=ExitCode.TERMINAL_ERROR,
                hint=str(exc) or "Check the configured shell command.",
            ) from exc

        session = PtySession(
            f"terminal-{next(self._ids)}",
            process,
            tuple(command),
            on_dispose=self._forget,
        )
        self._sessions[session.session_id] = session
        logger.info(
            "terminal-event session=%s step=create command=%s",
            session.session_id,
            subprocess.list2cmdline(command),
        )
        return session

    def list_sessions(self) -> list[PtySession]:
        return [self._sessions[key] for key in sorted(self._sessions)]

    def dispose_all(self) -> None:
        for session in list(self._sessions.values()):
            session.dispose()

    def _forget(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


def relay_session(
    session: PtySession,
    *,
    stdin: TextIO,
    stdout: TextIO,
    drain_seconds: float = 1.0,
) -> None:
    """Mirror terminal output to ``stdout`` and forward ``stdin`` lines until exit.

    Once input ends, pending output is drained for up to ``drain_seconds`` before
    the session is disposed.
    """

    def pump_output() -> None:
        while session.is_alive():
            try:
                chunk = session.read()
            except GitMenuError:
                logger.debug("terminal-relay read failed session=%s", session.session_id, exc_info=True)
                return
            if not chunk:
                return
            stdout.write(chunk)
            stdout.flush()

    reader = threading.Thread(target=pump_output, name=f"relay-{session.session_id}", daemon=True)
    reader.start()
    try:
        for line in stdin:
            if not session.is_alive():
                break
            session.send_input(line)
    finally:
        reader.join(timeout=drain_seconds)
        session.dispose()


def _close_process(process: object) -> None:
    alive = _is_alive(process)
    if hasattr(process, "close"):
        try:
            process.close()
        except TypeError:
            process.close(True)
        except Exception:
            logger.debug("terminal close failed", exc_info=True)
    if alive and _is_alive(process):
        if hasattr(process, "terminate"):
            with suppress(Exception):
                process.terminate()
        elif hasattr(process, "kill"):
            with suppress(Exception):
                process.kill()


def _is_alive(process: object) -> bool:
    if hasattr(process, "isalive"):
        try:
            return bool(process.isalive())
        except Exception:
            return False
    return True
