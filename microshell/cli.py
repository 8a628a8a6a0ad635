"""Command-line interface for microshell."""

from __future__ import annotations

import argparse
import logging
import os

from .exceptions import ShellExit
from .shell import DEFAULT_PROMPT, Shell


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--prompt",
        default=os.environ.get("MICROSHELL_PROMPT", DEFAULT_PROMPT),
        help="Prompt printed before each line (default: $MICROSHELL_PROMPT or %(default)r).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic logging level, written to stderr.",
    )


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run_exec(args: argparse.Namespace) -> int:
    shell = Shell(prompt=args.prompt)
    try:
        result = shell.exec(args.command)
    except ShellExit as exc:
        return exc.code
    return result.exit_code


def _run_shell(args: argparse.Namespace) -> int:
    shell = Shell(prompt=args.prompt)
    try:
        return shell.run()
    except KeyboardInterrupt:
        return shell.last_status


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="microshell")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command line")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("command", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    exit_code = args.func(args)
    raise SystemExit(exit_code)


__all__ = ["main"]
