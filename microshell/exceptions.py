"""Exception hierarchy for microshell."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .shell.common import CommandResult
    from .shell_parser import Redirection


class ShellError(Exception):
    """Base class for recoverable shell errors."""


class RedirectionSyntaxError(ShellError, ValueError):
    """Raised when a redirection operator is malformed."""


class RedirectionError(ShellError):
    """Raised when a redirection target cannot be opened."""

    def __init__(self, redirection: "Redirection", error: OSError) -> None:
        self.redirection = redirection
        super().__init__(redirection.describe_failure(error))


class ExportError(ShellError):
    """Raised when a variable cannot be placed in the environment."""


class ShellExit(Exception):
    """Raised by the ``exit`` builtin to end the session."""

    def __init__(self, code: int, result: "CommandResult") -> None:
        super().__init__(code)
        self.code = code
        self.result = result


__all__ = [
    "RedirectionError",
    "RedirectionSyntaxError",
    "ExportError",
    "ShellError",
    "ShellExit",
]
