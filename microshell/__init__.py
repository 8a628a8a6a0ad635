"""microshell package: a small line-oriented shell with variables and redirection."""

from .exceptions import ExportError, RedirectionError, RedirectionSyntaxError, ShellError, ShellExit
from .shell import CommandResult, Shell
from .shell_parser import Command, Redirection, RedirectionKind, parse_command, tokenize
from .substitution import substitute
from .variables import Variable, VariableStore

__all__ = [
    "Shell",
    "CommandResult",
    "Command",
    "Redirection",
    "RedirectionKind",
    "Variable",
    "VariableStore",
    "ExportError",
    "ShellError",
    "ShellExit",
    "RedirectionError",
    "RedirectionSyntaxError",
    "parse_command",
    "substitute",
    "tokenize",
]
