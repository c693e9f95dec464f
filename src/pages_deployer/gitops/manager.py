"""Git-based repository management."""

from __future__ import annotations

import logging
from pathlib import Path
from shlex import quote

from ..config import DeploymentConfig
from ..exceptions import CommandError, ConfigurationError
from ..reporting import StatusReporter
from .credentials import has_credentials
from .runner import CommandRunner

logger = logging.getLogger(__name__)

_MISSING_TOKEN = (
    "You must provide the action with either a Personal Access Token or the GitHub Token "
    "secret in order to deploy. If you wish to use an ssh deploy token then you must set "
    "SSH to true."
)
_BAD_FOLDER = (
    "The deployment folder cannot be prefixed with '/' or './'. "
    "Instead reference the folder name directly."
)


def validate_settings(config: DeploymentConfig) -> None:
    """Check the settings that must hold before any git command runs.

    Raises:
        ConfigurationError: describing the first problem found
    """
    if not config.folder:
        raise ConfigurationError("You must provide the action with a folder to deploy.")
    if not has_credentials(config) or not config.repository_path:
        raise ConfigurationError(_MISSING_TOKEN)
    if config.folder.startswith("/") or config.folder.startswith("./"):
        raise ConfigurationError(_BAD_FOLDER)


class GitRepositoryManager:
    """Wraps the `git` CLI calls that prepare the workspace repository."""

    def __init__(
        self,
        runner: CommandRunner,
        reporter: StatusReporter,
        git_binary: str = "git",
    ) -> None:
        self.runner = runner
        self.reporter = reporter
        self.git_binary = git_binary

    def initialize(self, config: DeploymentConfig) -> bool:
        """Make the workspace a repository whose `origin` is the deployment remote.

        Failures are reported and swallowed; the return value says whether the
        repository is ready.
        """
        try:
            validate_settings(config)

            self.reporter.log(f"Deploying using {config.token_type or '...'}... 🔑")
            workspace = Path(config.workspace)
            self._git("init", workspace)
            self._git(f"config user.name {quote(config.name)}", workspace)
            self._git(f"config user.email {quote(config.email)}", workspace)
            try:
                self._git("remote rm origin", workspace)
            except CommandError as exc:
                logger.debug("No existing origin remote to remove: %s", exc.stderr)
            self._git(f"remote add origin {quote(config.repository_path)}", workspace)
            self._git("fetch", workspace)
            return True
        except (ConfigurationError, CommandError) as exc:
            self.reporter.report_failure(f"There was an error initializing the repository: {exc}")
            return False
        finally:
            self.reporter.log("Initialization step complete...")

    def switch_to_base_branch(self, config: DeploymentConfig) -> str:
        """Force-checkout the base branch, or the default branch when unset."""
        target = config.base_branch or config.default_branch
        self._git(f"checkout --progress --force {quote(target)}", Path(config.workspace))
        return "Switched to the base branch..."

    def branch_exists(self, config: DeploymentConfig) -> bool:
        output = self._git(
            f"ls-remote --heads {quote(config.repository_path or '')} {quote(config.branch or '')}",
            Path(config.workspace),
        )
        return bool(output.strip())

    def generate_branch(self, config: DeploymentConfig) -> bool:
        """Create the deployment branch on the remote as a single empty orphan commit."""
        try:
            if not config.branch:
                raise ConfigurationError("Branch is required.")

            self.reporter.log(f"Creating {config.branch} branch... 🔧")
            workspace = Path(config.workspace)
            branch = quote(config.branch)
            self.switch_to_base_branch(config)
            self._git(f"checkout --orphan {branch}", workspace)
            self._git("reset --hard", workspace)
            self._git(
                f"commit --allow-empty -m {quote(f'Initial {config.branch} commit.')}",
                workspace,
            )
            self._git(f"push {quote(config.repository_path or '')} {branch}", workspace)
            self._git("fetch", workspace)
            return True
        except (ConfigurationError, CommandError) as exc:
            self.reporter.report_failure(
                f"There was an error creating the deployment branch: {exc} ❌"
            )
            return False
        finally:
            self.reporter.log("Deployment branch creation step complete... ✅")

    def _git(self, args: str, cwd: Path) -> str:
        return self.runner.execute(f"{self.git_binary} {args}", cwd)
