"""Shell command execution used to drive the git CLI."""

from __future__ import annotations

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..exceptions import CommandError

logger = logging.getLogger(__name__)

_MASK = "***"


def redact(text: str, secrets: Iterable[str]) -> str:
    """Replace every occurrence of each secret in ``text``."""
    for secret in secrets:
        if secret:
            text = text.replace(secret, _MASK)
    return text


class CommandRunner(ABC):
    """Runs one command string in a working directory."""

    @abstractmethod
    def execute(self, command: str, cwd: Union[str, Path]) -> str:
        """
        Run ``command`` inside ``cwd`` and wait for it to finish.

        Returns:
            Captured stdout, stripped

        Raises:
            CommandError: if the command exits with a non-zero status
        """


class ShellCommandRunner(CommandRunner):
    """Executes commands through bash on the local machine."""

    def __init__(
        self,
        secrets: Optional[List[str]] = None,
        *,
        verbose: bool = False,
        timeout: Optional[int] = None,
        shell: str = "/bin/bash",
    ) -> None:
        self.secrets = list(secrets or [])
        self.verbose = verbose
        self.timeout = timeout
        self.shell = shell

    def execute(self, command: str, cwd: Union[str, Path]) -> str:
        shown = redact(command, self.secrets)
        logger.debug("$ %s  (cwd=%s)", shown, cwd)
        try:
            process = subprocess.run(
                command,
                shell=True,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                executable=self.shell,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandError(shown, -1, f"Command timed out after {self.timeout} seconds") from exc

        stdout = redact(process.stdout.strip(), self.secrets)
        stderr = redact(process.stderr.strip(), self.secrets)
        if self.verbose:
            if stdout:
                logger.info("%s", stdout)
            if stderr:
                logger.info("%s", stderr)
        if process.returncode != 0:
            raise CommandError(shown, process.returncode, stderr)
        return process.stdout.strip()
