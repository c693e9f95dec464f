"""Status and failure reporting for a deployment run."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class StatusReporter(ABC):
    """Side channel for progress narration and failure marking.

    ``report_failure`` marks the whole run as failed without stopping the
    caller; whether to continue is the caller's decision.
    """

    def __init__(self) -> None:
        self.failures: List[str] = []

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    @abstractmethod
    def log(self, message: str) -> None:
        """Print a progress message."""

    def report_failure(self, message: str) -> None:
        self.failures.append(message)
        self._emit_failure(message)

    @abstractmethod
    def _emit_failure(self, message: str) -> None:
        pass


class ConsoleStatusReporter(StatusReporter):
    """Writes status lines to the terminal with rich.

    Under GitHub Actions, failures are also printed as ``::error::`` workflow
    commands so they show up as annotations on the step.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        *,
        annotate: Optional[bool] = None,
    ) -> None:
        super().__init__()
        self.console = console or Console(highlight=False)
        if annotate is None:
            annotate = os.getenv("GITHUB_ACTIONS", "").lower() == "true"
        self.annotate = annotate

    def log(self, message: str) -> None:
        logger.debug("%s", message)
        self.console.print(escape(message))

    def _emit_failure(self, message: str) -> None:
        logger.debug("failure: %s", message)
        if self.annotate:
            # Workflow commands must be single-line and unstyled
            flattened = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
            self.console.print(f"::error::{flattened}", markup=False, highlight=False, emoji=False)
        else:
            self.console.print(f"[bold red]{escape(message)}[/bold red]")


class CallbackStatusReporter(StatusReporter):
    """Forwards messages to plain callables, for embedding in other tools."""

    def __init__(
        self,
        on_log: Callable[[str], None],
        on_failure: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__()
        self._on_log = on_log
        self._on_failure = on_failure or on_log

    def log(self, message: str) -> None:
        self._on_log(message)

    def _emit_failure(self, message: str) -> None:
        self._on_failure(message)
