"""PySide6 dialogs for the confirmation host contract."""

from __future__ import annotations

import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from gitmenu.constants import CANCEL_LABEL
from gitmenu.errors import ExitCode, GitMenuError


def _load_widgets() -> Any:
    try:
        from PySide6 import QtWidgets
    except ImportError as exc:
        raise GitMenuError(
            "PySide6 is not installed; Qt dialogs are unavailable.",
            code=ExitCode.UI_ERROR,
            hint="Install the qt extra (`pip install gitmenu[qt]`) or use --dialogs console.",
        ) from exc
    return QtWidgets


class QtInputDialog:  # pragma: no cover - requires a display
    def __init__(self, widgets: Any, parent: Any, title: str, label: str, accept_label: str) -> None:
        self._dialog = widgets.QInputDialog(parent)
        self._dialog.setWindowTitle(title)
        self._dialog.setLabelText(label)
        self._dialog.setOkButtonText(accept_label)
        self._dialog.setCancelButtonText(CANCEL_LABEL)
        self._dialog.setTextEchoMode(widgets.QLineEdit.EchoMode.Normal)

    async def launch(self) -> str | None:
        if not self._dialog.exec():
            return None
        return self._dialog.textValue()

    def dispose(self) -> None:
        self._dialog.deleteLater()


class QtConfirmationHost:
    """Modal Qt dialogs; each call blocks the event loop until the user answers."""

    def __init__(self, parent: Any = None) -> None:
        self._widgets = _load_widgets()
        self._app = self._widgets.QApplication.instance() or self._widgets.QApplication(sys.argv[:1])
        self._parent = parent

    async def confirm(self, title: str, body: str, *, accept_label: str) -> bool:  # pragma: no cover
        box = self._widgets.QMessageBox(self._parent)
        box.setWindowTitle(title)
        box.setText(body)
        box.addButton(CANCEL_LABEL, self._widgets.QMessageBox.ButtonRole.RejectRole)
        accept_btn = box.addButton(accept_label, self._widgets.QMessageBox.ButtonRole.DestructiveRole)
        box.exec()
        accepted = box.clickedButton() is accept_btn
        box.deleteLater()
        return accepted

    @asynccontextmanager
    async def input_dialog(
        self,
        title: str,
        label: str,
        *,
        accept_label: str,
    ) -> AsyncIterator[QtInputDialog]:  # pragma: no cover
        dialog = QtInputDialog(self._widgets, self._parent, title, label, accept_label)
        try:
            yield dialog
        finally:
            dialog.dispose()

    async def show_message(self, title: str, body: str, *, dismiss_label: str) -> None:  # pragma: no cover
        box = self._widgets.QMessageBox(self._parent)
        box.setIcon(self._widgets.QMessageBox.Icon.Warning)
        box.setWindowTitle(title)
        box.setText(body)
        box.addButton(dismiss_label, self._widgets.QMessageBox.ButtonRole.AcceptRole)
        box.exec()
        box.deleteLater()
