"""Panel activation and tutorial links."""

from __future__ import annotations

import logging as py_logging
import webbrowser

from gitmenu.hosts import PanelActivator, UrlOpener

logger = py_logging.getLogger(__name__)


def activate_git_panel(activator: PanelActivator | None, panel_id: str) -> bool:
    if activator is None:
        logger.debug("git-panel no activator configured panel=%s", panel_id)
        return False
    try:
        activator.activate_by_id(panel_id)
    except Exception:
        logger.debug("git-panel activation failed panel=%s", panel_id, exc_info=True)
        return False
    return True


def open_tutorial(url: str, opener: UrlOpener | None = None) -> bool:
    launcher = opener or webbrowser.open
    try:
        opened = launcher(url)
    except Exception:
        logger.warning("tutorial open failed url=%s", url, exc_info=True)
        return False
    return opened is not False
