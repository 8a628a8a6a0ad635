"""Working-directory builtins."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from ..common import CommandResult
from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell

logger = logging.getLogger(__name__)


@COMMAND_REGISTRY.builtin("pwd")
def pwd(shell: "Shell", _: list[str]) -> CommandResult:
    try:
        cwd = os.getcwd()
    except OSError as exc:
        return CommandResult(stderr=f"pwd: {exc.strerror}\n", exit_code=1)
    return CommandResult(stdout=f"{cwd}\n")


@COMMAND_REGISTRY.builtin("cd")
def cd(shell: "Shell", args: list[str]) -> CommandResult:
    if not args:
        return CommandResult(stderr="cd: missing argument\n", exit_code=1)
    if len(args) > 1:
        return CommandResult(stderr="cd: too many arguments\n", exit_code=1)
    target = args[0]
    try:
        os.chdir(target)
    except (OSError, ValueError) as exc:
        logger.debug(f"chdir({target!r}) failed: {exc}")
        return CommandResult(stderr=f"cd: {target}: No such file or directory\n", exit_code=1)
    return CommandResult()
