"""$J{NAME} placeholder substitution for scripts.

Pure functions: no I/O, no state. Callers pass the declared variables and
the supplied name → value mapping; declared defaults are never applied here.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Protocol

from noteboard.errors import MissingVariablesError

PLACEHOLDER_RE = re.compile(r"\$J\{([^{}]+)\}")


class DeclaredVariable(Protocol):
    name: str
    required: bool


def find_missing(declared: Iterable[DeclaredVariable], supplied: Mapping[str, str]) -> list[str]:
    """Names of required variables with no value, or only whitespace, in ``supplied``."""
    missing = []
    for var in declared:
        if not var.required:
            continue
        value = supplied.get(var.name)
        if not isinstance(value, str) or not value.strip():
            missing.append(var.name)
    return missing


def validate_required(declared: Iterable[DeclaredVariable], supplied: Mapping[str, str]) -> None:
    missing = find_missing(declared, supplied)
    if missing:
        raise MissingVariablesError(missing)


def substitute(content: str, supplied: Mapping[str, str]) -> str:
    """Replace every ``$J{NAME}`` whose NAME is a key of ``supplied``.

    Single left-to-right pass: substituted values are not rescanned, and
    unknown placeholders are left exactly as written.
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in supplied:
            return str(supplied[name])
        return match.group(0)

    return PLACEHOLDER_RE.sub(_replace, content)


def render(content: str, declared: Iterable[DeclaredVariable], supplied: Mapping[str, str]) -> str:
    """Validate required variables first, then substitute."""
    validate_required(declared, supplied)
    return substitute(content, supplied)
