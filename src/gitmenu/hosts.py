"""Collaborator contracts consumed by the git menu workflows."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from gitmenu.models import GitOperationResult


class ShellSession(Protocol):
    def send_input(self, line: str) -> None: ...

    def dispose(self) -> None: ...


class ShellHost(Protocol):
    async def create_session(self, args: Mapping[str, str]) -> ShellSession: ...


class InputDialog(Protocol):
    async def launch(self) -> str | None: ...


class ConfirmationHost(Protocol):
    async def confirm(self, title: str, body: str, *, accept_label: str) -> bool: ...

    def input_dialog(
        self,
        title: str,
        label: str,
        *,
        accept_label: str,
    ) -> AbstractAsyncContextManager[InputDialog]: ...

    async def show_message(self, title: str, body: str, *, dismiss_label: str) -> None: ...


class GitService(Protocol):
    async def init(self, path: str) -> GitOperationResult: ...

    async def clone(self, path: str, name: str) -> GitOperationResult: ...


class PanelActivator(Protocol):
    def activate_by_id(self, panel_id: str) -> None: ...


class UrlOpener(Protocol):
    def __call__(self, url: str) -> object: ...
