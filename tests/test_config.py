from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from gitmenu.config import GIT_EXECUTABLE_ENV, AppConfig, load_config, save_config, update_config
from gitmenu.errors import ExitCode, GitMenuError


@pytest.fixture(autouse=True)
def _clear_git_env(monkeypatch) -> None:
    monkeypatch.delenv(GIT_EXECUTABLE_ENV, raising=False)


def test_load_defaults_when_config_missing(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "config.toml")

    assert cfg.file_browser_widget_id == "filebrowser"
    assert cfg.git_panel_id == "jp-git-sessions"
    assert cfg.shell_command == []
    assert cfg.git_executable == "git"
    assert cfg.session_create_timeout_seconds == 30
    assert cfg.git_init_timeout_seconds == 60
    assert cfg.git_clone_timeout_seconds == 300
    assert cfg.dialog_backend == "console"
    assert cfg.remotes_tutorial_url.startswith("https://www.atlassian.com/")


def test_config_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    original = AppConfig(
        file_browser_widget_id="browser-main",
        git_panel_id="git-panel",
        shell_command=["/bin/zsh", "-i"],
        git_executable="/usr/local/bin/git",
        session_create_timeout_seconds=5,
        git_init_timeout_seconds=12.5,
        git_clone_timeout_seconds=600,
        remotes_tutorial_url="https://example.com/remotes",
        dialog_backend="qt",
    )

    save_config(original, path)
    loaded = load_config(path)

    assert loaded == original


def test_save_config_restricts_permissions(tmp_path: Path) -> None:
    path = save_config(AppConfig(), tmp_path / "nested" / "config.toml")

    assert path.exists()
    assert path.stat().st_mode & 0o777 == 0o600


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        "\n".join(
            [
                'git_executable = "   "',
                "shell_command = [1, 2]",
                "session_create_timeout_seconds = -3",
                "git_init_timeout_seconds = true",
                'git_clone_timeout_seconds = "slow"',
                'dialog_backend = "gtk"',
                "git_panel_id = 42",
            ]
        )
        + "\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg == AppConfig()


def test_corrupt_toml_returns_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("this is = = not toml", encoding="utf-8")

    assert load_config(path) == AppConfig()


def test_env_overrides_git_executable(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(GIT_EXECUTABLE_ENV, " /opt/git/bin/git ")

    cfg = load_config(tmp_path / "missing.toml")

    assert cfg.git_executable == "/opt/git/bin/git"


def test_validate_assignment_rejects_bad_values() -> None:
    cfg = AppConfig()

    with pytest.raises(ValidationError):
        cfg.git_clone_timeout_seconds = 0
    with pytest.raises(ValidationError):
        cfg.dialog_backend = "tk"  # type: ignore[assignment]
    with pytest.raises(ValidationError):
        cfg.git_executable = ""


def test_update_config_keeps_existing_values(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    save_config(AppConfig(git_panel_id="git-side"), path)

    update_config(path, dialog_backend="qt", git_executable=None)

    loaded = load_config(path)
    assert loaded.dialog_backend == "qt"
    assert loaded.git_panel_id == "git-side"
    assert loaded.git_executable == "git"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("git_clone_timeout_seconds", -1.0),
        ("dialog_backend", "tk"),
        ("git_executable", "   "),
        ("wsl_distribution", "Ubuntu"),
    ],
)
def test_update_config_rejects_bad_settings(tmp_path: Path, key: str, value: object) -> None:
    path = tmp_path / "config.toml"

    with pytest.raises(GitMenuError) as exc:
        update_config(path, **{key: value})

    assert exc.value.code == ExitCode.CONFIG_ERROR
    assert key in exc.value.message
    assert not path.exists()
