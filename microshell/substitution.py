"""``$name`` expansion against a :class:`VariableStore`."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .variables import VariableStore

_REFERENCE_RE = re.compile(r"\$([A-Za-z0-9_]+)")


def substitute(token: str, variables: VariableStore) -> str:
    """Expand every ``$name`` in ``token``.

    Unknown names expand to the empty string and a ``$`` that does not start a
    name is kept. Expansion is single pass; values are never re-scanned.
    """

    if "$" not in token:
        return token

    def replacer(match: re.Match[str]) -> str:
        value = variables.get(match.group(1))
        return "" if value is None else value

    return _REFERENCE_RE.sub(replacer, token)


def substitute_all(tokens: Iterable[str], variables: VariableStore) -> list[str]:
    return [substitute(token, variables) for token in tokens]


__all__ = ["substitute", "substitute_all"]
