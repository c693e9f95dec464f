"""Exception types raised by pages-deployer."""

from __future__ import annotations


class DeployerError(RuntimeError):
    """Base class for all deployment errors."""


class ConfigurationError(DeployerError):
    """Raised when the deployment settings are missing or malformed."""


class CommandError(DeployerError):
    """Raised when a shell command exits with a non-zero status."""

    def __init__(self, command: str, exit_code: int, stderr: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"Command '{command}' failed with code {exit_code}: {stderr}")


class DeployError(DeployerError):
    """Raised when the orchestration cannot continue."""
