from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..domain.exceptions import ProcessLaunchError
from ..domain.models import RevertRequest, RevertResult, RevertStage, StageResult
from ..domain.revert import build_remote_url, describe_failure, format_revert_summary
from ..ports import LoggerPort, ProcessRunnerPort, WorkspacePort
from ...shared.redact import redact


GIT = "git"


class RevertPipeline:
    """Reverts a commit on a remote branch through a throwaway partial clone.

    Stages run strictly in order (prepare, clone, checkout, revert, push);
    the first failing stage stops the run. Each stage yields a tagged
    StageResult, so the caller can always tell which stage failed and what
    git printed. The workspace is disposed on every exit path.
    """

    def __init__(
        self,
        *,
        runner: ProcessRunnerPort,
        workspace: WorkspacePort,
        logger: LoggerPort,
    ) -> None:
        self._runner = runner
        self._workspace = workspace
        self._logger = logger

    def run(self, request: RevertRequest) -> RevertResult:
        result = RevertResult(request=request)
        self._logger.info(
            "revert_started",
            type="revert_started",
            repo=request.slug,
            branch=request.branch,
            commit=request.sha,
            authenticated=bool(request.token),
        )

        workdir: Path | None = None
        try:
            try:
                workdir = self._workspace.prepare(request.owner, request.repo)
            except (OSError, ValueError) as e:
                result.stages.append(
                    StageResult(
                        stage=RevertStage.PREPARE,
                        ok=False,
                        error=f"Failed to prepare workspace: {e}",
                    )
                )
                return self._finish(result)
            result.stages.append(StageResult(stage=RevertStage.PREPARE, ok=True))

            remote = build_remote_url(request.owner, request.repo, request.token)
            steps: list[tuple[RevertStage, list[str], Path | None]] = [
                (RevertStage.CLONE, ["clone", "--filter=blob:none", "--no-checkout", remote, str(workdir)], None),
                (RevertStage.CHECKOUT, ["checkout", request.branch], workdir),
                (RevertStage.REVERT, ["revert", "--no-edit", request.sha], workdir),
                (RevertStage.PUSH, ["push", "origin", request.branch], workdir),
            ]
            for stage, args, cwd in steps:
                stage_result = self._run_stage(stage, args, cwd)
                result.stages.append(stage_result)
                if not stage_result.ok:
                    return self._finish(result)

            push = result.stages[-1].outcome
            result.summary = format_revert_summary(request, push.stdout if push else "")
            return self._finish(result)
        finally:
            if workdir is not None:
                self._workspace.dispose(workdir)
                self._logger.debug("workspace_disposed", type="workspace_disposed", path=str(workdir))

    def _run_stage(self, stage: RevertStage, args: Sequence[str], cwd: Path | None) -> StageResult:
        self._logger.debug(
            "stage_started",
            type="stage_started",
            stage=stage.value,
            git_args=[redact(a) for a in args],
        )
        try:
            outcome = self._runner.run(GIT, args, cwd)
        except ProcessLaunchError as e:
            return StageResult(stage=stage, ok=False, error=str(e))

        if not outcome.succeeded:
            return StageResult(
                stage=stage,
                ok=False,
                outcome=outcome,
                error=redact(describe_failure(args[0], outcome)),
            )
        return StageResult(stage=stage, ok=True, outcome=outcome)

    def _finish(self, result: RevertResult) -> RevertResult:
        failed = result.failed
        if failed is None:
            self._logger.info(
                "revert_finished",
                type="revert_finished",
                repo=result.request.slug,
                branch=result.request.branch,
                commit=result.request.sha,
            )
        else:
            self._logger.error(
                "revert_failed",
                type="revert_failed",
                repo=result.request.slug,
                stage=failed.stage.value,
                exit_code=failed.outcome.exit_code if failed.outcome else None,
                error=failed.error,
            )
        return result
