"""Terminal-prompt confirmation host used by the command line."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import TextIO

from gitmenu.constants import CANCEL_LABEL
from gitmenu.errors import ExitCode, GitMenuError

Prompt = Callable[[str], str]

_YES_ANSWERS = {"y", "yes"}


class ConsoleInputDialog:
    def __init__(self, host: ConsoleConfirmationHost, title: str, label: str, accept_label: str) -> None:
        self._host = host
        self.title = title
        self.label = label
        self.accept_label = accept_label
        self.disposed = False

    async def launch(self) -> str | None:
        if self.disposed:
            raise GitMenuError(
                f"Dialog already disposed: {self.title}",
                code=ExitCode.UI_ERROR,
                hint="Open a new input dialog.",
            )
        answer = await self._host.ask(
            f"{self.title}\n{self.label} ({self.accept_label} with Enter, empty to {CANCEL_LABEL.lower()}): "
        )
        return answer.strip() or None

    def dispose(self) -> None:
        self.disposed = True


class ConsoleConfirmationHost:
    def __init__(self, *, prompt: Prompt | None = None, output: TextIO | None = None) -> None:
        self._prompt = prompt or input
        self._output = output

    async def ask(self, question: str) -> str:
        try:
            return await asyncio.to_thread(self._prompt, question)
        except EOFError:
            return ""

    async def confirm(self, title: str, body: str, *, accept_label: str) -> bool:
        answer = await self.ask(f"{title}\n{body} [{accept_label}/{CANCEL_LABEL}] (y/N): ")
        normalized = answer.strip().lower()
        return normalized in _YES_ANSWERS or normalized == accept_label.strip().lower()

    @asynccontextmanager
    async def input_dialog(
        self,
        title: str,
        label: str,
        *,
        accept_label: str,
    ) -> AsyncIterator[ConsoleInputDialog]:
        dialog = ConsoleInputDialog(self, title, label, accept_label)
        try:
            yield dialog
        finally:
            dialog.dispose()

    async def show_message(self, title: str, body: str, *, dismiss_label: str) -> None:
        del dismiss_label
        stream = self._output or sys.stderr
        stream.write(f"{title}: {body}\n")
        stream.flush()
