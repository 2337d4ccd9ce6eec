"""XDG config loading/saving."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from gitmenu.constants import (
    FILE_BROWSER_WIDGET_ID,
    GIT_CLONE_TIMEOUT_SECONDS,
    GIT_INIT_TIMEOUT_SECONDS,
    GIT_PANEL_ID,
    REMOTES_TUTORIAL_URL,
    SESSION_CREATE_TIMEOUT_SECONDS,
    VALID_DIALOG_BACKENDS,
    DialogBackendType,
)
from gitmenu.errors import ExitCode, GitMenuError

DEFAULT_CONFIG_PATH = Path("~/.config/gitmenu/config.toml").expanduser()
GIT_EXECUTABLE_ENV = "GITMENU_GIT"

_TIMEOUT_FIELDS = (
    "session_create_timeout_seconds",
    "git_init_timeout_seconds",
    "git_clone_timeout_seconds",
)


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    file_browser_widget_id: str = FILE_BROWSER_WIDGET_ID
    git_panel_id: str = GIT_PANEL_ID
    shell_command: list[str] = Field(default_factory=list)
    git_executable: str = "git"
    session_create_timeout_seconds: float = Field(default=SESSION_CREATE_TIMEOUT_SECONDS, gt=0)
    git_init_timeout_seconds: float = Field(default=GIT_INIT_TIMEOUT_SECONDS, gt=0)
    git_clone_timeout_seconds: float = Field(default=GIT_CLONE_TIMEOUT_SECONDS, gt=0)
    remotes_tutorial_url: str = REMOTES_TUTORIAL_URL
    dialog_backend: DialogBackendType = "console"

    @field_validator("dialog_backend")
    @classmethod
    def _validate_dialog_backend(cls, value: str) -> str:
        if value not in VALID_DIALOG_BACKENDS:
            raise ValueError(f"Invalid dialog backend: {value}")
        return value

    @field_validator("git_executable")
    @classmethod
    def _validate_git_executable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Git executable cannot be empty")
        return value.strip()


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    if isinstance(value, list):
        return "[" + ", ".join(_toml_scalar(item) for item in value) + "]"
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _non_empty_string(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _positive_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0:
        return None
    return float(value)


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    for key in ("file_browser_widget_id", "git_panel_id", "git_executable", "remotes_tutorial_url"):
        value = _non_empty_string(raw.get(key))
        if value is not None:
            setattr(cfg, key, value)

    shell_command = raw.get("shell_command", cfg.shell_command)
    if isinstance(shell_command, list) and all(isinstance(item, str) for item in shell_command):
        cfg.shell_command = [item for item in shell_command if item.strip()]

    for key in _TIMEOUT_FIELDS:
        timeout = _positive_number(raw.get(key))
        if timeout is not None:
            setattr(cfg, key, timeout)

    dialog_backend = raw.get("dialog_backend", cfg.dialog_backend)
    if isinstance(dialog_backend, str) and dialog_backend in VALID_DIALOG_BACKENDS:
        cfg.dialog_backend = cast(DialogBackendType, dialog_backend)

    env_git = os.getenv(GIT_EXECUTABLE_ENV, "").strip()
    if env_git:
        cfg.git_executable = env_git

    return cfg


def load_config(path: str | Path | None = None) -> AppConfig:
    resolved = get_config_path(path)
    if not resolved.exists():
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError):
        return _sanitize({})
    if not isinstance(raw, dict):
        return _sanitize({})
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        f"file_browser_widget_id = {_toml_scalar(config.file_browser_widget_id)}",
        f"git_panel_id = {_toml_scalar(config.git_panel_id)}",
        f"shell_command = {_toml_scalar(list(config.shell_command))}",
        f"git_executable = {_toml_scalar(config.git_executable)}",
        f"session_create_timeout_seconds = {_toml_scalar(config.session_create_timeout_seconds)}",
        f"git_init_timeout_seconds = {_toml_scalar(config.git_init_timeout_seconds)}",
        f"git_clone_timeout_seconds = {_toml_scalar(config.git_clone_timeout_seconds)}",
        f"remotes_tutorial_url = {_toml_scalar(config.remotes_tutorial_url)}",
        f"dialog_backend = {_toml_scalar(config.dialog_backend)}",
    ]

    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved


def update_config(path: str | Path | None = None, **values: object) -> Path:
    """Apply ``values`` to the stored config and write it back.

    ``None`` values are skipped. Unknown keys, invalid values and write failures
    raise :class:`GitMenuError` with ``CONFIG_ERROR``.
    """
    config = load_config(path)
    for key, value in values.items():
        if value is None:
            continue
        if key not in AppConfig.model_fields:
            raise GitMenuError(f"Unknown config key: {key}", code=ExitCode.CONFIG_ERROR)
        try:
            setattr(config, key, value)
        except ValueError as exc:
            raise GitMenuError(
                f"Invalid value for {key}: {value!r}",
                code=ExitCode.CONFIG_ERROR,
                hint="Timeouts must be positive and the git executable cannot be empty.",
            ) from exc
    try:
        return save_config(config, path)
    except OSError as exc:
        raise GitMenuError(
            f"Failed to write config: {get_config_path(path)}",
            code=ExitCode.CONFIG_ERROR,
            hint=str(exc),
        ) from exc
