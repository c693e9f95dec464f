"""Data models for the orchestrator module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..paths import STAGING_BRANCH_NAME, STAGING_DIR_NAME


class DeployStatus(Enum):
    """Outcome of one orchestration."""
    SUCCESS = "success"
    SKIPPED = "skipped"     # nothing to commit
    FAILED = "failed"


@dataclass
class RunState:
    """Mutable state owned by a single deploy() call."""

    staging_dir: str = STAGING_DIR_NAME
    staging_branch: str = STAGING_BRANCH_NAME
    has_changes: bool = False
    error: Optional[BaseException] = None
    branch_created: bool = False
    clean_exclude: List[str] = field(default_factory=list)


@dataclass
class DeployResult:
    """What deploy() did."""

    status: DeployStatus
    message: str = ""
    branch_created: bool = False
    files_copied: int = 0
    files_deleted: int = 0

    @property
    def ok(self) -> bool:
        return self.status is not DeployStatus.FAILED

    @property
    def pushed(self) -> bool:
        return self.status is DeployStatus.SUCCESS
