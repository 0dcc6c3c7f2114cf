from __future__ import annotations

import secrets
from pathlib import Path
from typing import ContextManager, Optional, Protocol, Sequence

from .domain.models import (
    CommandOutcome,
    CommitDetail,
    CommitSummary,
    GitHubRepo,
    GitHubUser,
    OAuthCredentials,
)


class ProcessRunnerPort(Protocol):
    """Port for running external version-control commands."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Optional[Path] = None,
    ) -> CommandOutcome:
        """Run ``command args...`` in ``cwd`` (current directory when None).

        Non-zero exit is reported through ``CommandOutcome.succeeded``.

        Raises:
            ProcessLaunchError: If the process could not be started
        """
        ...


class WorkspacePort(Protocol):
    """Port for the per-repository scratch directory."""

    def prepare(self, owner: str, repo: str) -> Path:
        """Return a fresh, empty directory for (owner, repo).

        Raises:
            InvalidRepositoryNameError: a name would escape the scratch root
            OSError: the directory could not be created
        """
        ...

    def dispose(self, path: Path) -> None:
        """Remove the directory. Never raises."""
        ...


class CredentialProviderPort(Protocol):
    """Port for OAuth client credentials.

    Abstracts environment lookups so tests can provide fixed values.
    """

    def load(self) -> OAuthCredentials:
        """Raises:
            MissingCredentialError: naming the variable that is not set
        """
        ...


class PendingCallbackPort(Protocol):
    port: int

    def receive(self) -> str:
        """Block until exactly one request arrives, answer it, return its target."""
        ...


class CallbackListenerPort(Protocol):
    """Port for the one-shot loopback HTTP listener."""

    def bind(self) -> ContextManager[PendingCallbackPort]:
        """Bind the listening socket; released when the context exits.

        Raises:
            ListenerBindError: If the port is unavailable
        """
        ...


class BrowserPort(Protocol):
    def open(self, url: str) -> bool:
        """Best-effort: return False instead of raising when no browser opens."""
        ...


class TokenExchangePort(Protocol):
    def exchange(
        self,
        *,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> str:
        """Exchange an authorization code for an access token."""
        ...


class GitHubAPIPort(Protocol):
    """Port for the GitHub REST calls used to browse repositories and commits."""

    def get_authenticated_user(self) -> GitHubUser:
        ...

    def list_repos(self) -> list[GitHubRepo]:
        ...

    def list_commits(self, owner: str, repo: str, branch: str | None = None) -> list[CommitSummary]:
        ...

    def get_commit(self, owner: str, repo: str, sha: str) -> CommitDetail:
        ...


class StateGeneratorPort(Protocol):
    def generate(self) -> str:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Keyword arguments are attached to the record as structured fields.
    """

    def debug(self, message: str, **kwargs) -> None:
        ...

    def info(self, message: str, **kwargs) -> None:
        ...

    def warning(self, message: str, **kwargs) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        ...

    def exception(self, message: str, **kwargs) -> None:
        ...


class DefaultStateGenerator:
    """16 random bytes, hex-encoded (32 characters)."""

    def generate(self) -> str:
        return secrets.token_hex(16)
