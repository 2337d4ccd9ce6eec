from __future__ import annotations

import sys

import pytest

from gitmenu.errors import ExitCode, GitMenuError
from gitmenu.ui.qt import QtConfirmationHost


def test_missing_pyside6_raises_ui_error(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "PySide6", None)

    with pytest.raises(GitMenuError) as exc:
        QtConfirmationHost()

    assert exc.value.code == ExitCode.UI_ERROR
    assert "qt extra" in exc.value.hint
