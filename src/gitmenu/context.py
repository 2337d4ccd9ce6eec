"""Best-effort resolution of the user's active working directory."""

from __future__ import annotations

import logging as py_logging
import os
from collections.abc import Callable, Iterable
from typing import Protocol

from gitmenu.constants import FILE_BROWSER_WIDGET_ID

logger = py_logging.getLogger(__name__)


class PathContextProvider(Protocol):
    def current_path(self) -> str | None: ...


class FileBrowserPathProvider:
    """Read the path shown by the host's file-browser panel widget.

    ``widgets`` is called on every lookup, since the active directory can change
    between invocations. The matching widget exposes either ``path`` directly or a
    ``model`` carrying it.
    """

    def __init__(
        self,
        widgets: Callable[[], Iterable[object]],
        *,
        widget_id: str = FILE_BROWSER_WIDGET_ID,
    ) -> None:
        self._widgets = widgets
        self.widget_id = widget_id

    def current_path(self) -> str | None:
        try:
            for widget in self._widgets():
                if getattr(widget, "id", None) != self.widget_id:
                    continue
                model = getattr(widget, "model", None)
                source = model if model is not None and hasattr(model, "path") else widget
                value = source.path
                return value if isinstance(value, str) else None
        except Exception:
            logger.debug("path-context lookup failed widget=%s", self.widget_id, exc_info=True)
            return None
        logger.debug("path-context widget not found widget=%s", self.widget_id)
        return None


class WorkingDirectoryProvider:
    """Path context for command-line use: an explicit path or the process cwd."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = os.fspath(path) if path is not None else None

    def current_path(self) -> str | None:
        if self._path is not None:
            return self._path
        try:
            return os.getcwd()
        except OSError:
            logger.debug("path-context cwd unavailable", exc_info=True)
            return None


def resolve_current_path(provider: PathContextProvider) -> str:
    """Return the active directory, or ``""`` when it cannot be determined."""
    try:
        value = provider.current_path()
    except Exception:
        logger.debug("path-context provider failed", exc_info=True)
        return ""
    if not isinstance(value, str):
        return ""
    return value
