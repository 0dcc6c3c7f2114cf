from __future__ import annotations

from ..domain.models import CommitDetail, CommitSummary, GitHubRepo, GitHubUser
from ..ports import GitHubAPIPort


class WhoAmIUseCase:
    """Validate a token by resolving the user it belongs to."""

    def __init__(self, *, github: GitHubAPIPort) -> None:
        self._github = github

    def execute(self) -> GitHubUser:
        return self._github.get_authenticated_user()


class ListReposUseCase:
    def __init__(self, *, github: GitHubAPIPort) -> None:
        self._github = github

    def execute(self) -> list[GitHubRepo]:
        return self._github.list_repos()


class ListCommitsUseCase:
    def __init__(self, *, github: GitHubAPIPort) -> None:
        self._github = github

    def execute(self, *, owner: str, repo: str, branch: str | None = None) -> list[CommitSummary]:
        return self._github.list_commits(owner, repo, branch)


class ShowCommitUseCase:
    def __init__(self, *, github: GitHubAPIPort) -> None:
        self._github = github

    def execute(self, *, owner: str, repo: str, sha: str) -> CommitDetail:
        return self._github.get_commit(owner, repo, sha)
