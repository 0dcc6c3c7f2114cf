from __future__ import annotations

import tempfile
from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "easy_git"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_cache_dir)


def _default_scratch_dir() -> Path:
    """Application subfolder of the OS temp dir, so unrelated temp cleanup never collides."""
    return Path(tempfile.gettempdir()) / APP_NAME


class DirectoryConfig(BaseSettings):
    """Directory configuration with computed paths."""

    model_config = SettingsConfigDict(env_prefix="EASY_GIT_DIRECTORIES__")

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for easy_git data",
    )

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """Logs directory for JSONL operation logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class WorkspaceConfig(BaseSettings):
    """Ephemeral clone workspace settings."""

    model_config = SettingsConfigDict(env_prefix="EASY_GIT_WORKSPACE__")

    scratch_dir: Path = Field(
        default_factory=_default_scratch_dir,
        description="Root for per-repository revert workspaces",
    )


class OAuthConfig(BaseSettings):
    """Loopback OAuth flow settings (client id/secret are read separately)."""

    model_config = SettingsConfigDict(env_prefix="EASY_GIT_OAUTH__")

    host: str = Field(default="127.0.0.1", description="Loopback interface for the callback listener")
    port: int = Field(default=17811, description="Fixed callback port registered with the OAuth app")
    callback_path: str = Field(default="/callback", description="Callback path of the redirect URI")
    scope: str = Field(default="repo", description="Requested OAuth scope")
    authorize_url: str = Field(default="https://github.com/login/oauth/authorize")
    token_url: str = Field(default="https://github.com/login/oauth/access_token")
    timeout_s: float = Field(default=10.0, description="Token exchange HTTP timeout in seconds")


class GitHubConfig(BaseSettings):
    """GitHub configuration."""

    model_config = SettingsConfigDict(env_prefix="EASY_GIT_GITHUB__")

    token: str | None = Field(
        default=None,
        description="Default access token for remote reverts and API calls",
    )
    api_url: str = Field(default="https://api.github.com")
    timeout_s: float = Field(default=10.0, description="REST API timeout in seconds")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="EASY_GIT_LOGGING__")

    level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    console_output: bool = Field(default=False, description="Also log human-readable lines to stderr")
    file_output: bool = Field(default=True, description="Append JSON lines to <logs_dir>/easy_git.jsonl")
    logger_name: str = Field(default=APP_NAME)


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with EASY_GIT_ prefix.
    Use double underscore for nested config: EASY_GIT_OAUTH__PORT

    Example env vars:
        export EASY_GIT_GITHUB__TOKEN=ghp_xxxxxxxxxxxxx
        export EASY_GIT_OAUTH__PORT=17811
        export EASY_GIT_WORKSPACE__SCRATCH_DIR=/tmp/easy_git
        export EASY_GIT_LOGGING__LEVEL=DEBUG

    OAuth client credentials are NOT part of this model; see
    ``easy_git.infra.credentials``.
    """

    model_config = SettingsConfigDict(
        env_prefix="EASY_GIT_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    oauth: OAuthConfig = Field(default_factory=OAuthConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
