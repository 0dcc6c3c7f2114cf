from __future__ import annotations

from ..domain.exceptions import RevertFailedError
from ..domain.models import RevertRequest
from ..services import RevertPipeline


class RevertTempCloneUseCase:
    """Thin layer over RevertPipeline that turns a failed run into an exception."""

    def __init__(self, *, pipeline: RevertPipeline) -> None:
        self._pipeline = pipeline

    def execute(
        self,
        *,
        owner: str,
        repo: str,
        sha: str,
        branch: str,
        token: str | None = None,
    ) -> str:
        """Returns:
            Multi-line summary naming repository, branch, commit and push output

        Raises:
            RevertFailedError: carrying the failed stage and git's error text
        """
        request = RevertRequest(owner=owner, repo=repo, sha=sha, branch=branch, token=token)
        result = self._pipeline.run(request)
        if not result.ok:
            failed = result.failed
            stage = failed.stage.value if failed else "unknown"
            raise RevertFailedError(stage, result.error or f"Revert failed during {stage}")
        return result.summary or ""
