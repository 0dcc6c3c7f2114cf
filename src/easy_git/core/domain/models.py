from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class RevertRequest:
    """A request to revert one commit on a remote GitHub branch.

    Immutable for the duration of a single pipeline run; never persisted.
    """
    owner: str
    repo: str
    sha: str
    branch: str
    token: str | None = field(default=None, repr=False)

    @property
    def slug(self) -> str:
        """Returns owner/repo format."""
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class CommandOutcome:
    """Captured result of one external command that was launched successfully."""
    succeeded: bool
    stdout: str
    stderr: str
    exit_code: int | None = None


class RevertStage(str, Enum):
    PREPARE = "prepare"
    CLONE = "clone"
    CHECKOUT = "checkout"
    REVERT = "revert"
    PUSH = "push"


@dataclass(frozen=True)
class StageResult:
    """Tagged outcome of a single pipeline stage.

    ``outcome`` is set whenever a command actually ran; ``error`` holds the
    human-readable failure text when ``ok`` is False.
    """
    stage: RevertStage
    ok: bool
    outcome: Optional[CommandOutcome] = None
    error: str | None = None


@dataclass
class RevertResult:
    request: RevertRequest
    stages: list[StageResult] = field(default_factory=list)
    summary: str | None = None

    @property
    def failed(self) -> StageResult | None:
        for result in self.stages:
            if not result.ok:
                return result
        return None

    @property
    def failed_stage(self) -> RevertStage | None:
        failed = self.failed
        return failed.stage if failed else None

    @property
    def error(self) -> str | None:
        failed = self.failed
        return failed.error if failed else None

    @property
    def ok(self) -> bool:
        return bool(self.stages) and self.failed is None


@dataclass(frozen=True)
class OAuthCredentials:
    client_id: str
    client_secret: str = field(repr=False)


@dataclass(frozen=True)
class OAuthSession:
    """State of one login attempt. ``state`` is single-use."""
    state: str
    redirect_uri: str
    client_id: str
    client_secret: str = field(repr=False)


@dataclass(frozen=True)
class CallbackParams:
    code: str = field(repr=False)
    state: str


@dataclass(frozen=True)
class TokenResult:
    access_token: str = field(repr=False)


# GitHub REST models


@dataclass(frozen=True)
class GitHubUser:
    login: str


@dataclass(frozen=True)
class GitHubRepo:
    id: int
    name: str
    full_name: str
    owner: str
    private: bool
    description: str | None
    default_branch: str


@dataclass(frozen=True)
class CommitSummary:
    sha: str
    message: str
    author_name: str
    date: str
    author_login: str | None
    html_url: str

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]


@dataclass(frozen=True)
class CommitFile:
    filename: str
    status: str  # added, removed, modified, renamed
    additions: int
    deletions: int
    changes: int | None = None
    patch: str | None = None


@dataclass(frozen=True)
class CommitDetail:
    sha: str
    message: str
    author_name: str
    date: str
    files: list[CommitFile] = field(default_factory=list)
