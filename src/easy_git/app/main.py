from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import AppConfig
from .container import Container
from ..core.domain.models import CommitDetail, CommitSummary, GitHubRepo, GitHubUser


def _create_container(config: AppConfig | None = None, *, token: str | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.
        token: Optional GitHub token overriding ``config.github.token``.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    if token:
        container.config.from_dict({"github": {"token": token}})
    container.init_resources()

    return container


def revert_in_place(
    sha: str,
    path: str | Path | None = None,
    *,
    config: AppConfig | None = None,
) -> str:
    """Revert a commit in an existing local working copy.

    Args:
        sha: Commit to revert
        path: Working copy; the current directory when None
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        git's stdout

    Raises:
        CommandFailedError: git reported an error (message is its output)
        ProcessLaunchError: git could not be started
    """
    container = _create_container(config)
    try:
        uc = container.revert_in_place_uc()
        return uc.execute(sha=sha, path=Path(path) if path is not None else None)
    finally:
        container.shutdown_resources()


def revert_via_temp_clone(
    owner: str,
    repo: str,
    sha: str,
    branch: str,
    token: str | None = None,
    *,
    config: AppConfig | None = None,
) -> str:
    """Revert a commit on a remote branch without a local clone.

    Args:
        owner: Repository owner login
        repo: Repository name
        sha: Commit to revert
        branch: Branch to revert on and push
        token: Access token embedded in the clone URL; ``config.github.token``
            when None, anonymous HTTPS when neither is set
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        Multi-line summary of the pushed revert

    Raises:
        RevertFailedError: a stage failed; ``.stage`` names it
    """
    container = _create_container(config, token=token)
    try:
        uc = container.revert_temp_clone_uc()
        return uc.execute(
            owner=owner,
            repo=repo,
            sha=sha,
            branch=branch,
            token=container.config.github.token(),
        )
    finally:
        container.shutdown_resources()


def oauth_login(
    *,
    on_authorize_url: Callable[[str], None] | None = None,
    config: AppConfig | None = None,
) -> str:
    """Log in through the browser and return a GitHub access token.

    Blocks until the browser redirect arrives. The token is not stored.

    Raises:
        MissingCredentialError, ListenerBindError, CallbackMalformedError,
        StateMismatchError, TokenExchangeError, TokenResponseParseError,
        NetworkError
    """
    container = _create_container(config)
    try:
        uc = container.oauth_login_uc()
        return uc.execute(on_authorize_url)
    finally:
        container.shutdown_resources()


def whoami(*, token: str | None = None, config: AppConfig | None = None) -> GitHubUser:
    container = _create_container(config, token=token)
    try:
        return container.whoami_uc().execute()
    finally:
        container.shutdown_resources()


def list_repos(*, token: str | None = None, config: AppConfig | None = None) -> list[GitHubRepo]:
    container = _create_container(config, token=token)
    try:
        return container.list_repos_uc().execute()
    finally:
        container.shutdown_resources()


def list_commits(
    owner: str,
    repo: str,
    branch: str | None = None,
    *,
    token: str | None = None,
    config: AppConfig | None = None,
) -> list[CommitSummary]:
    container = _create_container(config, token=token)
    try:
        return container.list_commits_uc().execute(owner=owner, repo=repo, branch=branch)
    finally:
        container.shutdown_resources()


def show_commit(
    owner: str,
    repo: str,
    sha: str,
    *,
    token: str | None = None,
    config: AppConfig | None = None,
) -> CommitDetail:
    container = _create_container(config, token=token)
    try:
        return container.show_commit_uc().execute(owner=owner, repo=repo, sha=sha)
    finally:
        container.shutdown_resources()
