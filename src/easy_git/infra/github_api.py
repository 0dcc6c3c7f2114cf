from __future__ import annotations

from typing import Any

import requests

from ..core.domain.exceptions import GitHubAPIError, NetworkError
from ..core.domain.models import CommitDetail, CommitFile, CommitSummary, GitHubRepo, GitHubUser


GITHUB_API = "https://api.github.com"


class GitHubAPI:
    """Minimal GitHub REST client for browsing repositories and commits."""

    def __init__(
        self,
        *,
        token: str | None,
        api_url: str = GITHUB_API,
        timeout_s: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout_s = timeout_s
        self._session = session or requests.Session()
        self._headers = {"Accept": "application/vnd.github.v3+json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def get_authenticated_user(self) -> GitHubUser:
        data = self._get("/user", action="Token validation")
        return GitHubUser(login=data["login"])

    def list_repos(self) -> list[GitHubRepo]:
        data = self._get(
            "/user/repos",
            params={"per_page": 100, "sort": "updated"},
            action="Repository listing",
        )
        return [_repo_from_json(item) for item in data]

    def list_commits(self, owner: str, repo: str, branch: str | None = None) -> list[CommitSummary]:
        params: dict[str, Any] = {"per_page": 100}
        if branch:
            params["sha"] = branch
        data = self._get(f"/repos/{owner}/{repo}/commits", params=params, action="Commit listing")
        return [_commit_summary_from_json(item) for item in data]

    def get_commit(self, owner: str, repo: str, sha: str) -> CommitDetail:
        data = self._get(f"/repos/{owner}/{repo}/commits/{sha}", action="Commit lookup")
        commit = data.get("commit") or {}
        author = commit.get("author") or {}
        return CommitDetail(
            sha=data["sha"],
            message=commit.get("message", ""),
            author_name=author.get("name", ""),
            date=author.get("date", ""),
            files=[_file_from_json(f) for f in data.get("files") or []],
        )

    def _get(self, path: str, *, action: str, params: dict[str, Any] | None = None) -> Any:
        # Always bypass caches: a revert should show up on the next listing.
        headers = dict(self._headers, **{"Cache-Control": "no-cache"})
        try:
            resp = self._session.get(
                f"{self._api_url}{path}",
                params=params,
                headers=headers,
                timeout=self._timeout_s,
            )
        except requests.RequestException as e:
            raise NetworkError(f"{action} failed: {e}") from e

        if not resp.ok:
            message = None
            try:
                body = resp.json()
                if isinstance(body, dict):
                    message = body.get("message")
            except ValueError:
                pass
            raise GitHubAPIError(message or f"{action} failed ({resp.status_code})", status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise GitHubAPIError(f"{action} returned invalid JSON") from e


def _repo_from_json(item: dict[str, Any]) -> GitHubRepo:
    return GitHubRepo(
        id=item["id"],
        name=item["name"],
        full_name=item["full_name"],
        owner=(item.get("owner") or {}).get("login", ""),
        private=bool(item.get("private", False)),
        description=item.get("description"),
        default_branch=item.get("default_branch", "main"),
    )


def _commit_summary_from_json(item: dict[str, Any]) -> CommitSummary:
    commit = item.get("commit") or {}
    author = commit.get("author") or {}
    gh_author = item.get("author") or {}
    return CommitSummary(
        sha=item["sha"],
        message=commit.get("message", ""),
        author_name=author.get("name", ""),
        date=author.get("date", ""),
        author_login=gh_author.get("login"),
        html_url=item.get("html_url", ""),
    )


def _file_from_json(item: dict[str, Any]) -> CommitFile:
    return CommitFile(
        filename=item["filename"],
        status=item.get("status", "modified"),
        additions=int(item.get("additions", 0)),
        deletions=int(item.get("deletions", 0)),
        changes=item.get("changes"),
        patch=item.get("patch"),
    )
