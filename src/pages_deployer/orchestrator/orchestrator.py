"""Deployment orchestrator: publishes the build folder to the deployment branch."""

from __future__ import annotations

import logging
from pathlib import Path
from shlex import quote
from typing import Optional

from ..config import DeploymentConfig
from ..exceptions import CommandError, DeployError
from ..gitops import CommandRunner, GitRepositoryManager
from ..reporting import StatusReporter
from ..workspace import StagingWorkspace, parse_clean_exclude
from .models import DeployResult, DeployStatus, RunState

logger = logging.getLogger(__name__)


def build_commit_message(config: DeploymentConfig) -> str:
    """Commit message for the deployment commit.

    The user supplied message wins over the generated one; the triggering
    commit id is appended when it is known.
    """
    if config.commit_message:
        message = config.commit_message
    else:
        base = config.base_branch or config.default_branch
        message = f"Deploying to {config.branch} from {base}"
    if config.commit_sha:
        message = f"{message} - {config.commit_sha}"
    return f"{message} 🚀"


class DeploymentOrchestrator:
    """
    Replaces the content of the deployment branch with the build folder.

    The target branch is checked out into a separate worktree so the caller's
    working tree and branch pointer stay where they are. Nothing reaches the
    remote until the final force-push.
    """

    def __init__(
        self,
        runner: CommandRunner,
        reporter: StatusReporter,
        repository: Optional[GitRepositoryManager] = None,
        git_binary: str = "git",
    ) -> None:
        self.runner = runner
        self.reporter = reporter
        self.git_binary = git_binary
        self.repository = repository or GitRepositoryManager(runner, reporter, git_binary)

    def deploy(self, config: DeploymentConfig) -> DeployResult:
        """
        Run one deployment.

        Errors are caught here and reported; the staging worktree is always
        removed and the default branch restored.

        Returns:
            DeployResult describing whether anything was pushed
        """
        state = RunState()
        workspace = Path(config.workspace)
        staging = StagingWorkspace(workspace, state.staging_dir)

        try:
            result = self._deploy(config, state, workspace, staging)
        except Exception as exc:
            state.error = exc
            logger.debug("Deployment failed", exc_info=True)
            self.reporter.report_failure(f"The deploy step encountered an error: {exc}")
            result = DeployResult(
                status=DeployStatus.FAILED,
                message=str(exc),
                branch_created=state.branch_created,
            )
        finally:
            self._teardown(config, workspace, staging)
            self.reporter.log("Commit step complete...")
        return result

    def _deploy(
        self,
        config: DeploymentConfig,
        state: RunState,
        workspace: Path,
        staging: StagingWorkspace,
    ) -> DeployResult:
        if not config.branch:
            raise DeployError("Branch is required.")
        if not config.folder:
            raise DeployError("You must provide the action with a folder to deploy.")
        remote = quote(config.repository_path or "")
        branch = quote(config.branch)

        if not self.repository.branch_exists(config) and not config.is_test:
            self.reporter.log("Deployment branch does not exist. Creating....")
            if not self.repository.generate_branch(config):
                raise DeployError(f"The {config.branch} branch could not be created.")
            state.branch_created = True

        self.repository.switch_to_base_branch(config)
        self._git(f"fetch {remote}", workspace)
        self._git(
            f"worktree add --checkout {quote(state.staging_dir)} {quote('origin/' + config.branch)}",
            workspace,
        )

        if config.clean:
            state.clean_exclude = parse_clean_exclude(config.clean_exclude)

        sync = staging.synchronize(
            workspace / config.folder,
            target_folder=config.target_folder,
            clean=config.clean,
            clean_exclude=state.clean_exclude,
            source_is_root=self._is_root(config),
        )

        state.has_changes = bool(self._git("status --porcelain", staging.path).strip())
        if not state.has_changes and not config.is_test:
            self.reporter.log("There is nothing to commit. Exiting... ✅")
            return DeployResult(
                status=DeployStatus.SKIPPED,
                message="Nothing to commit.",
                branch_created=state.branch_created,
                files_copied=sync.copied,
                files_deleted=sync.deleted,
            )

        self._git("add --all .", staging.path)
        self._git(f"checkout -B {quote(state.staging_branch)}", staging.path)
        self._git(f"commit -m {quote(build_commit_message(config))} --quiet", staging.path)
        self._git(
            f"push --force {remote} {quote(state.staging_branch)}:{branch}",
            staging.path,
        )

        return DeployResult(
            status=DeployStatus.SUCCESS,
            message=f"Deployed {config.folder} to {config.branch}.",
            branch_created=state.branch_created,
            files_copied=sync.copied,
            files_deleted=sync.deleted,
        )

    def _teardown(self, config: DeploymentConfig, workspace: Path, staging: StagingWorkspace) -> None:
        self.reporter.log("Running post deployment cleanup jobs... 🔧")
        staging.cleanup()
        try:
            self._git("worktree prune", workspace)
            self._git(f"checkout --progress --force {quote(config.default_branch)}", workspace)
        except CommandError as exc:
            self.reporter.report_failure(f"Post deployment cleanup failed: {exc}")

    def _is_root(self, config: DeploymentConfig) -> bool:
        folder = (config.folder or "").rstrip("/") or "."
        return folder in (".", config.root.rstrip("/") or ".")

    def _git(self, args: str, cwd: Path) -> str:
        return self.runner.execute(f"{self.git_binary} {args}", cwd)
