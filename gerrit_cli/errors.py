"""
Custom exception types used across gerrit-cli.

Every failure a user can trigger is a GerritCliError subclass, so the
CLI can turn it into a single diagnostic line while unexpected bugs
still surface with a traceback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .commands import OperationKind


class GerritCliError(Exception):
    """Base class for all gerrit-cli specific errors."""


class UnknownCommandError(GerritCliError):
    """Raised when the command token is missing or not registered."""

    def __init__(self, token: str | None, available: Sequence[str]) -> None:
        self.token = token
        self.available = list(available)
        super().__init__(f"Invalid command(available: {', '.join(self.available)})")


class ArgCountError(GerritCliError):
    """Raised when an operation receives fewer arguments than it needs."""

    def __init__(self, operation: "OperationKind", minimum: int) -> None:
        self.operation = operation
        self.minimum = minimum
        super().__init__(
            f"Invalid number of args for {operation.value}(min: {minimum})"
        )


class ConfigIOError(GerritCliError):
    """Raised when the configuration store cannot be created, read or written."""
