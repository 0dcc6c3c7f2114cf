"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from ..core.domain.models import CommitDetail, CommitSummary, GitHubRepo


def format_repo_list(repos: list[GitHubRepo]) -> str:
    if not repos:
        return "No repositories found."

    lines = [f"Found {len(repos)} repositories:", ""]
    lines.append("-" * 100)
    lines.append(f"{'Repository':<45} {'Visibility':<10} {'Default branch':<20} Description")
    lines.append("-" * 100)
    for r in repos:
        name = r.full_name
        if len(name) > 45:
            name = name[:42] + "..."
        visibility = "private" if r.private else "public"
        description = (r.description or "").replace("\n", " ")
        if len(description) > 40:
            description = description[:37] + "..."
        lines.append(f"{name:<45} {visibility:<10} {r.default_branch:<20} {description}")
    lines.append("-" * 100)
    return "\n".join(lines)


def format_commit_list(commits: list[CommitSummary]) -> str:
    if not commits:
        return "No commits found."

    lines = [f"Found {len(commits)} commits:", ""]
    for c in commits:
        who = c.author_login or c.author_name
        title = c.title
        if len(title) > 72:
            title = title[:69] + "..."
        lines.append(f"{c.sha[:7]}  {c.date[:10]:<10}  {who:<20}  {title}")
    return "\n".join(lines)


def format_commit_detail(detail: CommitDetail, show_patch: bool = False) -> str:
    lines = []
    lines.append("=" * 80)
    lines.append(f"commit {detail.sha}")
    lines.append(f"Author: {detail.author_name}")
    lines.append(f"Date:   {detail.date}")
    lines.append("")
    for line in detail.message.splitlines():
        lines.append(f"    {line}")

    if detail.files:
        lines.append("\n" + "-" * 80)
        lines.append(f"{len(detail.files)} files changed")
        lines.append("-" * 80)
        for f in detail.files:
            lines.append(f"{f.status:<9} +{f.additions:<5} -{f.deletions:<5} {f.filename}")
            if show_patch and f.patch:
                lines.append(f.patch)

    lines.append("=" * 80)
    return "\n".join(lines)
