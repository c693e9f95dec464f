"""High-level workflow: initialize the repository, then deploy."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .config import DeploymentConfig
from .gitops import (
    CommandRunner,
    GitRepositoryManager,
    ShellCommandRunner,
    generate_repository_path,
    generate_token_type,
    has_credentials,
)
from .orchestrator import DeploymentOrchestrator, DeployResult
from .reporting import ConsoleStatusReporter, StatusReporter
from .utils.logging import enable_debug, get_logger

logger = get_logger(__name__)

SUCCESS_STATUS = "Completed Deployment Successfully! ✅"
FAILURE_STATUS = "Deployment Failed ❌"


@dataclass
class DeploymentOutcome:
    """Completion signal handed back to the caller."""

    success: bool
    status: str
    result: Optional[DeployResult] = None


def resolve_settings(config: DeploymentConfig) -> DeploymentConfig:
    """Fill in the derived settings: remote URL and token type."""
    settings = replace(config)
    if not settings.repository_path and settings.repository_name and has_credentials(settings):
        settings.repository_path = generate_repository_path(settings)
    settings.token_type = generate_token_type(settings)
    return settings


class DeploymentWorkflow:
    """Coordinates one deployment run."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        reporter: Optional[StatusReporter] = None,
        git_binary: str = "git",
    ) -> None:
        self.runner = runner
        self.reporter = reporter or ConsoleStatusReporter()
        self.git_binary = git_binary

    def run(self, config: DeploymentConfig) -> DeploymentOutcome:
        """Run the deployment and report overall success or failure."""
        error_state = False
        result: Optional[DeployResult] = None
        try:
            self.reporter.log("Checking configuration and starting deployment...🚦")
            settings = resolve_settings(config)
            if settings.debug:
                enable_debug()

            runner = self.runner or ShellCommandRunner(
                secrets=settings.secrets, verbose=settings.debug
            )
            repository = GitRepositoryManager(runner, self.reporter, self.git_binary)
            if not repository.initialize(settings):
                logger.info("Skipping deployment because initialization failed")
                error_state = True
            else:
                orchestrator = DeploymentOrchestrator(
                    runner, self.reporter, repository, self.git_binary
                )
                result = orchestrator.deploy(settings)
                error_state = not result.ok
        except Exception as exc:
            error_state = True
            logger.debug("Unhandled deployment error", exc_info=True)
            self.reporter.report_failure(str(exc))
        finally:
            error_state = error_state or self.reporter.failed
            status = FAILURE_STATUS if error_state else SUCCESS_STATUS
            self.reporter.log(status)

        return DeploymentOutcome(success=not error_state, status=status, result=result)
