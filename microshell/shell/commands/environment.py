"""Variable and environment builtins."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...exceptions import ExportError
from ..common import CommandResult
from ..registry import COMMAND_REGISTRY

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..core import Shell


@COMMAND_REGISTRY.builtin("export")
def export(shell: "Shell", args: list[str]) -> CommandResult:
    if not args:
        return CommandResult(stderr="export: missing argument\n", exit_code=1)
    errors: list[str] = []
    for name in args:
        try:
            found = shell.variables.mark_exported(name)
        except ExportError as exc:
            errors.append(f"export: {exc}\n")
            continue
        if not found:
            errors.append(f"export: {name} not found\n")
    # unknown names are reported but never fail the command
    return CommandResult(stderr="".join(errors))


@COMMAND_REGISTRY.builtin("printenv")
def printenv(shell: "Shell", args: list[str]) -> CommandResult:
    if args:
        return CommandResult(stderr="printenv: this command takes no arguments\n", exit_code=1)
    environ = shell.variables.environ
    return CommandResult(stdout="".join(f"{name}={value}\n" for name, value in environ.items()))
