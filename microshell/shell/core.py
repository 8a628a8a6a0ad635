"""Core Shell implementation."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from contextlib import ExitStack
from typing import TextIO

from ..exceptions import RedirectionError, RedirectionSyntaxError, ShellError, ShellExit
from ..shell_parser import Command, parse_line
from ..variables import VariableStore, parse_assignment
from .common import CommandHandler, CommandResult, ShellCommand
from .process import run_program
from .redirection import StreamBinding, emit_result
from .registry import COMMAND_REGISTRY

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = "microshell$ "


class Shell:
    """Reads command lines, expands variables and runs builtins or programs."""

    def __init__(
        self,
        *,
        variables: VariableStore | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        prompt: str | None = None,
    ) -> None:
        self.variables = VariableStore() if variables is None else variables
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.prompt = DEFAULT_PROMPT if prompt is None else prompt
        self.last_status = 0
        self.commands: dict[str, CommandHandler] = {}
        self._register_builtin_commands()

    # ------------------------------------------------------------------
    # Builtin registration
    # ------------------------------------------------------------------
    def register_command(self, name: str, handler: CommandHandler) -> None:
        self.commands[name] = handler

    def _bind_registered_handler(self, func: ShellCommand) -> CommandHandler:
        def bound(args: list[str]) -> CommandResult | str | None:
            return func(self, args)

        return bound

    def _register_builtin_commands(self) -> None:
        # Import builtin modules for their side effects (registration)
        from . import commands  # noqa: F401

        for spec in COMMAND_REGISTRY:
            self.register_command(spec.name, self._bind_registered_handler(spec.handler))

    # ------------------------------------------------------------------
    # Read loop
    # ------------------------------------------------------------------
    def run(self) -> int:
        """Prompt and execute lines until end-of-input or ``exit``."""
        while True:
            self.stdout.write(self.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                return self.last_status
            try:
                self._exec_one(line)
            except ShellExit as exc:
                return exc.code

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------
    def exec(self, command: str) -> CommandResult:
        """Run each line of ``command``; return the last executed result.

        Blank lines are skipped and leave :attr:`last_status` untouched.
        """
        last_result: CommandResult | None = None
        for line in command.split("\n"):
            result = self._exec_one(line)
            if result is not None:
                last_result = result
        if last_result is None:
            return CommandResult(exit_code=self.last_status)
        return last_result

    def _exec_one(self, line: str) -> CommandResult | None:
        try:
            parsed = parse_line(line)
        except RedirectionSyntaxError as exc:
            result = CommandResult(stderr=f"{exc}\n", exit_code=2)
            emit_result(result, self.stdout, self.stderr)
            self.last_status = result.exit_code
            return result
        if parsed is None:
            return None

        command = parsed.substitute(self.variables)
        logger.debug(f"Parsed {command.argv!r} with redirections {command.redirections!r}")
        try:
            result = self._dispatch(command)
        except ShellExit as exc:
            self.last_status = exc.code
            raise
        self.last_status = result.exit_code
        return result

    def _dispatch(self, command: Command) -> CommandResult:
        assignment = parse_assignment(command.argv)
        if assignment is not None:
            name, value = assignment
            logger.debug(f"Assigning {name}")
            return self._run_in_process(command, lambda: self._assign(name, value))
        handler = self.commands.get(command.name)
        if handler is not None:
            logger.debug(f"Running builtin {command.name}")
            return self._run_in_process(command, lambda: handler(command.args))
        self._flush()
        result = run_program(command.argv, command.redirections, self.variables.environ)
        emit_result(result, self.stdout, self.stderr)
        return result

    def _assign(self, name: str, value: str) -> CommandResult:
        self.variables.set(name, value)
        return CommandResult()

    def _run_in_process(
        self,
        command: Command,
        action: Callable[[], CommandResult | str | None],
    ) -> CommandResult:
        with ExitStack() as stack:
            streams = StreamBinding(self.stdout, self.stderr, stack)
            try:
                streams.apply(command.redirections)
            except RedirectionError as exc:
                result = CommandResult(stderr=f"{exc}\n", exit_code=1)
                streams.emit(result)
                return result
            try:
                result = _coerce_result(action())
            except ShellExit as exc:
                streams.emit(exc.result)
                raise
            except ShellError as exc:
                result = CommandResult(stderr=f"{command.name}: {exc}\n", exit_code=1)
            streams.emit(result)
            return result

    def _flush(self) -> None:
        for stream in (self.stdout, self.stderr, sys.stdout, sys.stderr):
            stream.flush()


def _coerce_result(result: CommandResult | str | None) -> CommandResult:
    if isinstance(result, CommandResult):
        return result
    if result is None:
        return CommandResult()
    return CommandResult(stdout=str(result))


__all__ = ["DEFAULT_PROMPT", "Shell"]
