from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import typer
from dotenv import load_dotenv

from .config import AppConfig, LoggingConfig
from .container import Container
from .cli_formatter import format_commit_detail, format_commit_list, format_repo_list
from ..core.domain.exceptions import ConfigurationError, EasyGitError

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _build_container(log_level: str, token: str | None = None) -> Container:
    level = logging._nameToLevel.get(log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', force=True)

    base = AppConfig()
    config = base.model_copy(
        update={
            "logging": LoggingConfig(
                level=log_level.upper(),
                console_output=True,
                file_output=base.logging.file_output,
                logger_name=base.logging.logger_name,
            )
        }
    )

    container = Container()
    container.config.from_pydantic(config)
    if token:
        container.config.from_dict({"github": {"token": token}})
    container.init_resources()
    return container


def _fail(e: EasyGitError) -> typer.Exit:
    typer.echo(f"Error: {e}", err=True)
    return typer.Exit(code=2 if isinstance(e, ConfigurationError) else 1)


@app.command()
def revert(
    sha: str = typer.Argument(..., help="Commit SHA to revert"),
    path: Path | None = typer.Option(None, "--path", "-C", help="Local working copy (default: current directory)"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
):
    """Revert a commit in an existing local working copy."""
    container = _build_container(log_level)
    try:
        output = container.revert_in_place_uc().execute(sha=sha, path=path)
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()
    typer.echo(output)


@app.command(name="revert-remote")
def revert_remote(
    owner: str = typer.Argument(..., help="Repository owner login"),
    repo: str = typer.Argument(..., help="Repository name"),
    sha: str = typer.Argument(..., help="Commit SHA to revert"),
    branch: str = typer.Option("main", "--branch", "-b", help="Branch to revert on and push"),
    token: str | None = typer.Option(None, "--token", help="Access token (default: EASY_GIT_GITHUB__TOKEN)"),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
):
    """Revert a commit on GitHub through a temporary partial clone, then push."""
    container = _build_container(log_level, token)
    try:
        summary = container.revert_temp_clone_uc().execute(
            owner=owner,
            repo=repo,
            sha=sha,
            branch=branch,
            token=container.config.github.token(),
        )
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()
    typer.echo(summary)


@app.command()
def login(
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
):
    """Log in through the browser and print the access token.

    The token is printed to stdout only; nothing is stored.
    """
    container = _build_container(log_level)
    config = container.config.oauth
    typer.echo(
        f"Waiting for the GitHub redirect on http://{config.host()}:{config.port()}{config.callback_path()} ...",
        err=True,
    )

    def show_url(url: str) -> None:
        typer.echo(f"If the browser did not open, visit:\n{url}", err=True)

    try:
        token = container.oauth_login_uc().execute(show_url)
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()
    typer.echo(token)


@app.command()
def whoami(
    token: str | None = typer.Option(None, "--token", help="Access token (default: EASY_GIT_GITHUB__TOKEN)"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
):
    """Show the GitHub login the token belongs to."""
    container = _build_container(log_level, token)
    try:
        user = container.whoami_uc().execute()
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()
    typer.echo(user.login)


@app.command()
def repos(
    token: str | None = typer.Option(None, "--token", help="Access token (default: EASY_GIT_GITHUB__TOKEN)"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
):
    """List repositories of the authenticated user, most recently updated first."""
    container = _build_container(log_level, token)
    try:
        items = container.list_repos_uc().execute()
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps({"count": len(items), "repositories": [asdict(r) for r in items]}, ensure_ascii=False, indent=2))
    else:
        typer.echo(format_repo_list(items))


@app.command()
def commits(
    owner: str = typer.Argument(..., help="Repository owner login"),
    repo: str = typer.Argument(..., help="Repository name"),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Branch (default: repository default)"),
    token: str | None = typer.Option(None, "--token", help="Access token (default: EASY_GIT_GITHUB__TOKEN)"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
):
    """List recent commits of a repository."""
    container = _build_container(log_level, token)
    try:
        items = container.list_commits_uc().execute(owner=owner, repo=repo, branch=branch)
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps({"count": len(items), "commits": [asdict(c) for c in items]}, ensure_ascii=False, indent=2))
    else:
        typer.echo(format_commit_list(items))


@app.command()
def show(
    owner: str = typer.Argument(..., help="Repository owner login"),
    repo: str = typer.Argument(..., help="Repository name"),
    sha: str = typer.Argument(..., help="Commit SHA"),
    patch: bool = typer.Option(False, "--patch", "-p", help="Include per-file patches"),
    token: str | None = typer.Option(None, "--token", help="Access token (default: EASY_GIT_GITHUB__TOKEN)"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level", case_sensitive=False),
):
    """Show a commit and the files it changed."""
    container = _build_container(log_level, token)
    try:
        detail = container.show_commit_uc().execute(owner=owner, repo=repo, sha=sha)
    except EasyGitError as e:
        raise _fail(e)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(asdict(detail), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_commit_detail(detail, show_patch=patch))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
