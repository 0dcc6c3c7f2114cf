"""Tests for Pydantic BaseSettings configuration."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from easy_git.app.config import (
    AppConfig,
    DirectoryConfig,
    GitHubConfig,
    LoggingConfig,
    OAuthConfig,
    WorkspaceConfig,
)


def test_directory_config_computed_logs_dir(tmp_path):
    config = DirectoryConfig(home=tmp_path)

    assert config.logs_dir == tmp_path / "logs"
    assert config.logs_dir.exists()


def test_oauth_defaults(monkeypatch):
    monkeypatch.setenv("PORT", "1")
    config = OAuthConfig()

    assert config.host == "127.0.0.1"
    assert config.port == 17811
    assert config.callback_path == "/callback"
    assert config.scope == "repo"
    assert config.token_url == "https://github.com/login/oauth/access_token"


def test_github_config_defaults():
    config = GitHubConfig()
    assert config.token is None
    assert config.api_url == "https://api.github.com"


def test_logging_defaults():
    config = LoggingConfig()
    assert config.level == "INFO"
    assert config.file_output is True
    assert config.console_output is False


def test_workspace_from_env(tmp_path):
    # conftest points EASY_GIT_WORKSPACE__SCRATCH_DIR at tmp_path / "scratch"
    assert WorkspaceConfig().scratch_dir == tmp_path / "scratch"


def test_app_config_reads_nested_env(monkeypatch, tmp_path):
    monkeypatch.setenv("EASY_GIT_OAUTH__PORT", "9000")
    monkeypatch.setenv("EASY_GIT_GITHUB__TOKEN", "gho_env")
    monkeypatch.setenv("EASY_GIT_LOGGING__LEVEL", "DEBUG")

    config = AppConfig()

    assert config.oauth.port == 9000
    assert config.github.token == "gho_env"
    assert config.logging.level == "DEBUG"
    assert config.directories.home == tmp_path / "home"


def test_app_config_explicit_values(tmp_path):
    config = AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        workspace=WorkspaceConfig(scratch_dir=tmp_path / "ws"),
    )

    assert isinstance(config.directories.logs_dir, Path)
    assert config.workspace.scratch_dir == tmp_path / "ws"


def test_app_config_is_frozen():
    config = AppConfig()
    with pytest.raises(ValidationError):
        config.github = GitHubConfig(token="x")
