"""Git operations helpers."""

from .credentials import generate_repository_path, generate_token_type, has_credentials
from .manager import GitRepositoryManager, validate_settings
from .runner import CommandRunner, ShellCommandRunner, redact

__all__ = [
    "CommandRunner",
    "GitRepositoryManager",
    "ShellCommandRunner",
    "generate_repository_path",
    "generate_token_type",
    "has_credentials",
    "redact",
    "validate_settings",
]
