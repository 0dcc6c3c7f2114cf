from __future__ import annotations

from pathlib import Path

from ..core.domain.exceptions import InvalidRepositoryNameError
from ..core.domain.revert import validate_repository
from ..core.ports import LoggerPort
from ..shared.rmtree_force import rmtree_force


class EphemeralWorkspace:
    """Deterministic scratch directories, one per (owner, repo).

    Paths look like ``<scratch_dir>/<owner>_<repo>_revert``. A leftover from a
    previous failed run is wiped by ``prepare``, so ``dispose`` may fail
    without breaking later runs. Nothing outside ``scratch_dir`` is ever
    deleted.
    """

    def __init__(self, *, scratch_dir: Path, logger: LoggerPort) -> None:
        self._scratch_dir = Path(scratch_dir)
        self._logger = logger

    def path_for(self, owner: str, repo: str) -> Path:
        """Raises:
            InvalidRepositoryNameError: a name is not a plain GitHub name
        """
        validate_repository(owner, repo)
        path = self._scratch_dir / f"{owner}_{repo}_revert"
        if not path.resolve().is_relative_to(self._scratch_dir.resolve()):
            raise InvalidRepositoryNameError(f"{owner}/{repo}")
        return path

    def prepare(self, owner: str, repo: str) -> Path:
        path = self.path_for(owner, repo)
        if path.exists():
            self._logger.info("stale_workspace_removed", type="stale_workspace_removed", path=str(path))
            rmtree_force(path, within=self._scratch_dir)
        path.mkdir(parents=True)
        return path

    def dispose(self, path: Path) -> None:
        try:
            rmtree_force(path, within=self._scratch_dir)
        except (OSError, ValueError) as e:
            self._logger.warning(
                "workspace_dispose_failed",
                type="workspace_dispose_failed",
                path=str(path),
                error=str(e),
            )
