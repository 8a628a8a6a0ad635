"""Registry of builtin commands.

Builtins register themselves at import time through :data:`COMMAND_REGISTRY`;
every :class:`~microshell.shell.core.Shell` binds the registered handlers when
it is created. A name in the registry is always dispatched in-process, so the
set of registered names decides what never reaches the process executor.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .common import ShellCommand


@dataclass(frozen=True, slots=True)
class BuiltinSpec:
    name: str
    handler: ShellCommand


class BuiltinRegistry:
    def __init__(self) -> None:
        self._builtins: dict[str, BuiltinSpec] = {}

    def add(self, name: str, handler: ShellCommand) -> ShellCommand:
        if name in self._builtins:
            raise ValueError(f"Builtin {name!r} is already registered")
        self._builtins[name] = BuiltinSpec(name, handler)
        return handler

    def builtin(self, name: str) -> Callable[[ShellCommand], ShellCommand]:
        """Decorator form of :meth:`add`."""

        def decorator(func: ShellCommand) -> ShellCommand:
            return self.add(name, func)

        return decorator

    def __iter__(self) -> Iterator[BuiltinSpec]:
        return iter(tuple(self._builtins.values()))


COMMAND_REGISTRY = BuiltinRegistry()


__all__ = ["COMMAND_REGISTRY", "BuiltinRegistry", "BuiltinSpec"]
