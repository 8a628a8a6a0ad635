"""Shell variable storage with environment mirroring."""

from __future__ import annotations

import logging
import os
from collections.abc import MutableMapping
from dataclasses import dataclass

from .exceptions import ExportError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Variable:
    name: str
    value: str
    exported: bool = False


class VariableStore:
    """Owns the shell's variables and mirrors exported ones into ``environ``.

    ``environ`` defaults to :data:`os.environ` so exported variables reach child
    processes. Pass a private dict to keep independent shells isolated.
    """

    def __init__(self, environ: MutableMapping[str, str] | None = None) -> None:
        self.environ: MutableMapping[str, str] = os.environ if environ is None else environ
        self._variables: dict[str, Variable] = {}

    def set(self, name: str, value: str, exported: bool = False) -> Variable:
        variable = self._variables.get(name)
        if variable is None:
            variable = Variable(name, value, exported)
            self._variables[name] = variable
        else:
            variable.value = value
            # exported never resets to False
            variable.exported = variable.exported or exported
        if variable.exported:
            self._mirror(variable)
        return variable

    def get(self, name: str) -> str | None:
        variable = self._variables.get(name)
        return None if variable is None else variable.value

    def mark_exported(self, name: str) -> bool:
        variable = self._variables.get(name)
        if variable is None:
            return False
        self._mirror(variable)
        variable.exported = True
        return True

    def is_exported(self, name: str) -> bool:
        variable = self._variables.get(name)
        return variable is not None and variable.exported

    def _mirror(self, variable: Variable) -> None:
        logger.debug(f"Exporting {variable.name} to environment")
        try:
            self.environ[variable.name] = variable.value
        except ValueError as exc:
            # os.environ rejects NUL bytes
            raise ExportError(f"{variable.name}: cannot export: {exc}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)


def parse_assignment(tokens: list[str]) -> tuple[str, str] | None:
    """Return ``(name, value)`` when ``tokens`` is a lone ``name=value`` word."""

    if len(tokens) != 1:
        return None
    name, sep, value = tokens[0].partition("=")
    if not sep or not name:
        return None
    return name, value


__all__ = ["Variable", "VariableStore", "parse_assignment"]
