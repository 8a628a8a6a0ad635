"""Apply redirections to builtins running inside the shell process."""

from __future__ import annotations

import logging
import os
from contextlib import ExitStack
from typing import TextIO

from ..exceptions import RedirectionError
from ..shell_parser import Redirection, RedirectionKind
from .common import CommandResult

logger = logging.getLogger(__name__)


class StreamBinding:
    """Output streams a builtin writes to, after redirection.

    Targets are opened in order and owned by ``stack``. Opening stops at the
    first failure, leaving only the earlier redirections in effect.
    """

    def __init__(self, stdout: TextIO, stderr: TextIO, stack: ExitStack) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self._stack = stack

    def apply(self, redirections: list[Redirection]) -> None:
        for redirection in redirections:
            try:
                fd = redirection.open()
            except OSError as exc:
                logger.warning(f"Redirection {redirection.kind.value} {redirection.path} failed: {exc}")
                raise RedirectionError(redirection, exc) from exc
            if redirection.kind is RedirectionKind.INPUT:
                # builtins never read stdin
                os.close(fd)
                continue
            stream = self._stack.enter_context(os.fdopen(fd, "w"))
            if redirection.kind.target_fd == 2:
                self.stderr = stream
            else:
                self.stdout = stream

    def emit(self, result: CommandResult) -> None:
        emit_result(result, self.stdout, self.stderr)


def emit_result(result: CommandResult, stdout: TextIO, stderr: TextIO) -> None:
    if result.stdout:
        stdout.write(result.stdout)
        stdout.flush()
    if result.stderr:
        stderr.write(result.stderr)
        stderr.flush()


__all__ = ["StreamBinding", "emit_result"]
