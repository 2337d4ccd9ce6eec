"""Shared constants for git menu workflows."""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# TIMEOUT CONSTANTS (in seconds)
# =============================================================================

SESSION_CREATE_TIMEOUT_SECONDS: float = 30
GIT_INIT_TIMEOUT_SECONDS: float = 60
GIT_CLONE_TIMEOUT_SECONDS: float = 300

# =============================================================================
# LIMIT CONSTANTS
# =============================================================================

DEFAULT_LOG_TRUNCATE_LIMIT: int = 700
TERMINAL_READ_CHUNK_BYTES: int = 4096

# =============================================================================
# HOST IDENTIFIERS
# =============================================================================

FILE_BROWSER_WIDGET_ID: str = "filebrowser"
GIT_PANEL_ID: str = "jp-git-sessions"
REMOTES_TUTORIAL_URL: str = "https://www.atlassian.com/git/tutorials/setting-up-a-repository"

# =============================================================================
# DIALOG TEXT
# =============================================================================

INIT_TITLE: str = "Initialize a Repository"
INIT_BODY: str = "Do you really want to make this directory a Git Repo?"
INIT_ACCEPT_LABEL: str = "Yes"
INIT_FAILED_TITLE: str = "Initialization failed"

CLONE_TITLE: str = "Create Git Project"
CLONE_LABEL: str = "Enter the Clone URI of the repository"
CLONE_ACCEPT_LABEL: str = "Create"
CLONE_FAILED_TITLE: str = "Creation failed"

DISMISS_LABEL: str = "DISMISS"
CANCEL_LABEL: str = "Cancel"

# =============================================================================
# REGEX PATTERNS (compiled at module level)
# =============================================================================

AUTH_BEARER_PATTERN: re.Pattern[str] = re.compile(
    r"(Authorization:\s*Bearer)\s+\S+",
    re.IGNORECASE,
)

URL_CREDENTIAL_PATTERN: re.Pattern[str] = re.compile(
    r"(https?://)([^/\s:@]+):([^@\s]+)@",
)

GH_TOKEN_PATTERN: re.Pattern[str] = re.compile(
    r"\bgh[pousr]_[A-Za-z0-9_]+\b",
)

# =============================================================================
# TYPE ALIASES
# =============================================================================

DialogBackendType = Literal["console", "qt"]
VALID_DIALOG_BACKENDS: set[str] = {"console", "qt"}
