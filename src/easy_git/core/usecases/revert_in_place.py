from __future__ import annotations

from pathlib import Path

from ..domain.exceptions import CommandFailedError
from ..domain.revert import describe_failure
from ..ports import LoggerPort, ProcessRunnerPort


class RevertInPlaceUseCase:
    """Revert a commit inside an existing local working copy.

    No clone, push or cleanup: only ``git revert`` runs, in ``path`` or the
    current working directory.
    """

    def __init__(self, *, runner: ProcessRunnerPort, logger: LoggerPort) -> None:
        self._runner = runner
        self._logger = logger

    def execute(self, *, sha: str, path: Path | None = None) -> str:
        """Returns:
            git's stdout on success

        Raises:
            CommandFailedError: git ran but the revert failed
            ProcessLaunchError: git could not be started
        """
        self._logger.info(
            "revert_in_place_started",
            type="revert_in_place_started",
            commit=sha,
            workdir=str(path) if path else None,
        )
        outcome = self._runner.run("git", ["revert", "--no-edit", sha], path)
        if not outcome.succeeded:
            message = describe_failure("revert", outcome)
            self._logger.error(
                "revert_in_place_failed",
                type="revert_in_place_failed",
                commit=sha,
                exit_code=outcome.exit_code,
                error=message,
            )
            raise CommandFailedError(message, exit_code=outcome.exit_code)

        self._logger.info("revert_in_place_finished", type="revert_in_place_finished", commit=sha)
        return outcome.stdout
