"""Subprocess-backed git service for init and clone."""

from __future__ import annotations

import asyncio
import logging as py_logging
import subprocess
from contextlib import suppress
from urllib.parse import unquote

from gitmenu.constants import GIT_CLONE_TIMEOUT_SECONDS, GIT_INIT_TIMEOUT_SECONDS
from gitmenu.models import GitOperationResult
from gitmenu.security import command_for_log, sanitize_log_text

logger = py_logging.getLogger(__name__)

FAILURE_CODE = -1


async def _terminate(process: asyncio.subprocess.Process) -> None:
    with suppress(ProcessLookupError):
        process.kill()
    await process.wait()


class SubprocessGitService:
    """Run git in the target directory and report ``{code, message}``.

    Clone names arrive percent-encoded from the clone workflow and are decoded
    before being passed to git. The git child never outlives the call: it is
    killed on timeout and when the awaiting task is cancelled.
    """

    def __init__(
        self,
        *,
        git_executable: str = "git",
        init_timeout_seconds: float = GIT_INIT_TIMEOUT_SECONDS,
        clone_timeout_seconds: float = GIT_CLONE_TIMEOUT_SECONDS,
    ) -> None:
        self.git_executable = git_executable
        self.init_timeout_seconds = init_timeout_seconds
        self.clone_timeout_seconds = clone_timeout_seconds

    async def init(self, path: str) -> GitOperationResult:
        return await self._run_git(["init"], cwd=path, operation="init", timeout=self.init_timeout_seconds)

    async def clone(self, path: str, name: str) -> GitOperationResult:
        remote = unquote(name).strip()
        if not remote:
            return GitOperationResult(code=FAILURE_CODE, message="Clone URI is required.")
        return await self._run_git(
            ["clone", remote],
            cwd=path,
            operation="clone",
            timeout=self.clone_timeout_seconds,
        )

    async def _run_git(
        self,
        git_args: list[str],
        *,
        cwd: str,
        operation: str,
        timeout: float,
    ) -> GitOperationResult:
        command = [self.git_executable, *git_args]
        workdir = cwd if cwd.strip() else None
        logger.info("git-service op=%s cwd=%s cmd=%s", operation, workdir or ".", command_for_log(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                cwd=workdir,
            )
        except OSError as exc:
            logger.warning("git-service op=%s spawn failed: %s", operation, exc)
            return GitOperationResult(code=FAILURE_CODE, message=f"Failed to run git: {exc}")

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            await _terminate(process)
            message = f"git {operation} timed out after {timeout:g}s"
            logger.warning("git-service op=%s %s", operation, message)
            return GitOperationResult(code=FAILURE_CODE, message=message)
        finally:
            if process.returncode is None:
                logger.warning("git-service op=%s cancelled, killing pid=%s", operation, process.pid)
                await _terminate(process)

        code = process.returncode if process.returncode is not None else FAILURE_CODE
        out_text = stdout.decode("utf-8", errors="replace").strip()
        err_text = stderr.decode("utf-8", errors="replace").strip()
        message = (err_text or out_text) if code != 0 else (out_text or err_text)
        logger.info(
            "git-service op=%s rc=%s output=%s",
            operation,
            code,
            sanitize_log_text(message),
        )
        return GitOperationResult(code=code, message=message)

