from __future__ import annotations

import re
from urllib.parse import quote

from .exceptions import InvalidRepositoryNameError
from .models import CommandOutcome, RevertRequest


GITHUB_HOST = "github.com"

# Characters GitHub allows in user, organization and repository names
_NAME = re.compile(r"[A-Za-z0-9._-]+")


def validate_repository(owner: str, repo: str) -> None:
    """Raise InvalidRepositoryNameError unless both names are plain GitHub names.

    Rejects empty names, path separators, and the ``.`` / ``..`` segments.
    """
    for name in (owner, repo):
        if not _NAME.fullmatch(name) or name in (".", ".."):
            raise InvalidRepositoryNameError(name)


def build_remote_url(owner: str, repo: str, token: str | None = None) -> str:
    """Return the HTTPS clone URL, embedding ``token`` as x-access-token when given."""
    if token:
        return f"https://x-access-token:{quote(token, safe='')}@{GITHUB_HOST}/{owner}/{repo}.git"
    return f"https://{GITHUB_HOST}/{owner}/{repo}.git"


def describe_failure(subcommand: str, outcome: CommandOutcome) -> str:
    """Human-readable failure text for a command that exited non-zero.

    stderr wins; stdout is used when stderr is empty (some git failures only
    print there); otherwise a message is synthesized from the exit code.
    """
    stderr = outcome.stderr.strip()
    if stderr:
        return stderr
    stdout = outcome.stdout.strip()
    if stdout:
        return stdout
    return f"git {subcommand} failed (exit code {outcome.exit_code})"


def format_revert_summary(request: RevertRequest, push_stdout: str) -> str:
    lines = [
        "Revert pushed successfully.",
        f"Repository: {request.slug}",
        f"Branch: {request.branch}",
        f"Reverted commit: {request.sha}",
    ]
    push_stdout = push_stdout.strip()
    if push_stdout:
        lines.append("")
        lines.append(push_stdout)
    return "\n".join(lines)
