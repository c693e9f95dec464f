"""Deployment orchestration: stage, synchronize, commit and publish."""

from .models import DeployResult, DeployStatus, RunState
from .orchestrator import DeploymentOrchestrator, build_commit_message

__all__ = [
    "DeployResult",
    "DeployStatus",
    "DeploymentOrchestrator",
    "RunState",
    "build_commit_message",
]
