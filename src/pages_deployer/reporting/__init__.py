"""Status reporting for deployment runs."""

from .reporter import CallbackStatusReporter, ConsoleStatusReporter, StatusReporter

__all__ = ["CallbackStatusReporter", "ConsoleStatusReporter", "StatusReporter"]
