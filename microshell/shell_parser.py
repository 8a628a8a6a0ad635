"""Minimal shell parser for words and redirections."""

from __future__ import annotations

import errno
import os
import re
from dataclasses import dataclass, field, replace
from enum import Enum

from .exceptions import RedirectionSyntaxError
from .substitution import substitute, substitute_all
from .variables import VariableStore

_CREATE_MODE = 0o666


class RedirectionKind(Enum):
    """Redirection operators, keyed by their literal token."""

    OUTPUT = ">"
    APPEND = ">>"
    INPUT = "<"
    ERROR_OUTPUT = "2>"

    @property
    def target_fd(self) -> int:
        if self is RedirectionKind.INPUT:
            return 0
        if self is RedirectionKind.ERROR_OUTPUT:
            return 2
        return 1

    @property
    def open_flags(self) -> int:
        if self is RedirectionKind.INPUT:
            return os.O_RDONLY
        if self is RedirectionKind.APPEND:
            return os.O_WRONLY | os.O_CREAT | os.O_APPEND
        return os.O_WRONLY | os.O_CREAT | os.O_TRUNC


_OPERATORS = {kind.value: kind for kind in RedirectionKind}


@dataclass(frozen=True, slots=True)
class Redirection:
    kind: RedirectionKind
    path: str

    def open(self) -> int:
        """Open the target and return the raw descriptor.

        A path with an embedded NUL byte fails like any other bad path, with
        :class:`OSError`.
        """
        try:
            return os.open(self.path, self.kind.open_flags, _CREATE_MODE)
        except ValueError as exc:
            raise OSError(errno.EINVAL, os.strerror(errno.EINVAL), self.path) from exc

    def describe_failure(self, error: OSError) -> str:
        reason = error.strerror or os.strerror(error.errno or 0)
        if self.kind is RedirectionKind.INPUT:
            return f"cannot access {self.path}: {reason}"
        return f"{self.path}: {reason}"


@dataclass
class Command:
    argv: list[str]
    redirections: list[Redirection] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.argv[0]

    @property
    def args(self) -> list[str]:
        return self.argv[1:]

    def substitute(self, variables: VariableStore) -> "Command":
        """Return a copy with ``$name`` references expanded."""
        return Command(
            argv=substitute_all(self.argv, variables),
            redirections=[
                replace(redirection, path=substitute(redirection.path, variables))
                for redirection in self.redirections
            ],
        )


_WHITESPACE_RE = re.compile(r"[ \t]+")


def tokenize(line: str) -> list[str]:
    """Split on runs of spaces and tabs. There is no quoting."""
    return [token for token in _WHITESPACE_RE.split(line.rstrip("\r\n")) if token]


def parse_command(tokens: list[str]) -> Command:
    """Split ``tokens`` into command words and ordered redirections."""

    argv: list[str] = []
    redirections: list[Redirection] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]
        kind = _OPERATORS.get(token)
        if kind is None:
            argv.append(token)
            idx += 1
            continue
        if idx + 1 >= len(tokens):
            raise RedirectionSyntaxError(f"Missing redirection target after {token}")
        redirections.append(Redirection(kind, tokens[idx + 1]))
        idx += 2

    if not argv:
        raise RedirectionSyntaxError("Redirection without command is not supported")
    return Command(argv=argv, redirections=redirections)


def parse_line(line: str) -> Command | None:
    """Tokenize and parse one input line; ``None`` for a blank line."""
    tokens = tokenize(line)
    if not tokens:
        return None
    return parse_command(tokens)


__all__ = [
    "Command",
    "Redirection",
    "RedirectionKind",
    "parse_command",
    "parse_line",
    "tokenize",
]
