"""Run external programs in a forked child."""

from __future__ import annotations

import logging
import os
import signal
from collections.abc import Mapping
from typing import NoReturn

from ..shell_parser import Redirection
from .common import CommandResult

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


def run_program(
    argv: list[str],
    redirections: list[Redirection],
    env: Mapping[str, str],
) -> CommandResult:
    """Fork, redirect, exec ``argv`` and wait for it to finish.

    The caller must flush its own buffered output first; anything still
    buffered would otherwise be written twice.
    """

    try:
        pid = os.fork()
    except OSError as exc:
        return CommandResult(stderr=f"fork: {exc.strerror}\n", exit_code=1)
    if pid == 0:
        _exec_child(argv, redirections, env)

    logger.debug(f"Spawned {argv[0]!r} as pid {pid}")
    status = _wait(pid)
    if status is None:
        return CommandResult(exit_code=1)
    exit_code = translate_wait_status(status)
    logger.debug(f"pid {pid} finished with status {exit_code}")
    return CommandResult(exit_code=exit_code)


def translate_wait_status(status: int) -> int:
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status)
    if os.WIFSIGNALED(status):
        return 128 + os.WTERMSIG(status)
    return 1


def _wait(pid: int) -> int | None:
    while True:
        try:
            _, status = os.waitpid(pid, 0)
        except KeyboardInterrupt:
            # the child got the same SIGINT; keep waiting so it is reaped
            continue
        except ChildProcessError as exc:
            logger.error(f"waitpid failed for pid {pid}: {exc}")
            return None
        return status


def _exec_child(
    argv: list[str],
    redirections: list[Redirection],
    env: Mapping[str, str],
) -> NoReturn:
    code = COMMAND_NOT_FOUND
    try:
        code = _child_main(argv, redirections, env)
    finally:
        os._exit(code)


def _child_main(
    argv: list[str],
    redirections: list[Redirection],
    env: Mapping[str, str],
) -> int:
    _restore_signals()
    for redirection in redirections:
        try:
            fd = redirection.open()
        except OSError as exc:
            _write_stderr(redirection.describe_failure(exc))
            return 1
        target = redirection.kind.target_fd
        if fd != target:
            os.dup2(fd, target)
            os.close(fd)
    try:
        os.execvpe(argv[0], argv, env)
    except (OSError, ValueError):
        # ValueError: empty name or embedded NUL
        _write_stderr(f"{argv[0]}: command not found")
    return COMMAND_NOT_FOUND


def _restore_signals() -> None:
    # Python ignores these at startup and SIG_IGN survives exec
    for name in ("SIGPIPE", "SIGXFSZ"):
        if hasattr(signal, name):
            signal.signal(getattr(signal, name), signal.SIG_DFL)


def _write_stderr(message: str) -> None:
    os.write(2, f"{message}\n".encode(errors="replace"))


__all__ = ["COMMAND_NOT_FOUND", "run_program", "translate_wait_status"]
