from __future__ import annotations

from pathlib import Path
from typing import Sequence

from git.cmd import Git
from git.exc import GitCommandNotFound

from ..core.domain.exceptions import ProcessLaunchError
from ..core.domain.models import CommandOutcome
from ..core.ports import LoggerPort


class GitProcessRunner:
    """Runs commands through GitPython's ``Git.execute``.

    ``with_exceptions=False`` keeps a non-zero exit an ordinary outcome; only
    a process that cannot be started raises. GitPython forces the C locale,
    so git messages are stable English text.
    """

    def __init__(self, *, logger: LoggerPort) -> None:
        self._logger = logger

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path | None = None,
    ) -> CommandOutcome:
        # Git.execute silently falls back to the process cwd when the given
        # directory is unusable, so check it here.
        if cwd is not None and not Path(cwd).is_dir():
            raise ProcessLaunchError(command, f"working directory does not exist: {cwd}")

        git = Git(str(cwd) if cwd is not None else None)
        try:
            status, stdout, stderr = git.execute(
                [command, *args],
                with_extended_output=True,
                with_exceptions=False,
            )
        except GitCommandNotFound as e:
            raise ProcessLaunchError(command, "executable not found") from e
        except OSError as e:
            raise ProcessLaunchError(command, e.strerror or str(e)) from e

        outcome = CommandOutcome(
            succeeded=status == 0,
            stdout=stdout,
            stderr=stderr,
            exit_code=status,
        )
        self._logger.debug(
            "command_finished",
            type="command_finished",
            command=command,
            subcommand=args[0] if args else None,
            exit_code=status,
        )
        return outcome
