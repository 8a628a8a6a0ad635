"""Shell package: read loop, builtins and the process executor."""

from .common import CommandResult
from .core import DEFAULT_PROMPT, Shell

__all__ = ["Shell", "CommandResult", "DEFAULT_PROMPT"]
