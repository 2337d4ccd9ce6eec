"""Log sanitization and credential masking."""

from __future__ import annotations

import shlex

from gitmenu.constants import (
    AUTH_BEARER_PATTERN,
    DEFAULT_LOG_TRUNCATE_LIMIT,
    GH_TOKEN_PATTERN,
    URL_CREDENTIAL_PATTERN,
)


def truncate_log(value: str, limit: int = DEFAULT_LOG_TRUNCATE_LIMIT) -> str:
    """Truncate log text to the specified limit with ellipsis."""
    value = value.strip()
    if len(value) <= limit:
        return value
    return value[: max(0, limit - 3)] + "..."


def sanitize_log_text(value: str, limit: int = DEFAULT_LOG_TRUNCATE_LIMIT) -> str:
    """Mask credentials in clone URIs and git output, bounded for logging."""
    if not value:
        return ""

    sanitized = AUTH_BEARER_PATTERN.sub(r"\1 ***", value)
    sanitized = URL_CREDENTIAL_PATTERN.sub(r"\1***:***@", sanitized)
    sanitized = GH_TOKEN_PATTERN.sub("***", sanitized)
    return truncate_log(sanitized, limit)


def command_for_log(args: list[str]) -> str:
    """Return a shell-safe, sanitized command string for logging."""
    if not args:
        return ""
    return sanitize_log_text(" ".join(shlex.quote(part) for part in args))
