"""Session builtins: ``echo`` and ``exit``."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ...exceptions import ShellExit
from ..common import CommandResult
from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell

FAREWELL = "Good Bye\n"

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def parse_exit_code(text: str) -> int:
    """Read a leading integer the way ``atoi`` does, masked to 0..255."""
    match = _LEADING_INT_RE.match(text)
    if match is None:
        return 0
    return int(match.group(1)) & 0xFF


@COMMAND_REGISTRY.builtin("echo")
def echo(shell: "Shell", args: list[str]) -> CommandResult:
    return CommandResult(stdout=" ".join(args) + "\n")


@COMMAND_REGISTRY.builtin("exit")
def exit_(shell: "Shell", args: list[str]) -> CommandResult:
    code = parse_exit_code(args[0]) if args else 0
    raise ShellExit(code, CommandResult(stdout=FAREWELL, exit_code=code))
