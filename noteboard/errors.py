"""Domain errors shared by services and mapped to HTTP responses in main."""

from __future__ import annotations


class NoteboardError(Exception):
    """Base class for noteboard domain errors."""


class NotFoundError(NoteboardError):
    """A script (or other addressed record) does not exist."""

    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} '{key}' not found")
        self.kind = kind
        self.key = key


class ValidationError(NoteboardError):
    """Caller supplied missing or empty input."""


class MissingVariablesError(ValidationError):
    """Required script variables were not supplied (or were blank)."""

    def __init__(self, names: list[str]) -> None:
        quoted = ", ".join(f"'{n}'" for n in names)
        noun = "variable" if len(names) == 1 else "variables"
        super().__init__(f"Required {noun} {quoted} missing")
        self.names = names


class CryptoIntegrityError(NoteboardError):
    """Stored ciphertext failed authentication (tampered, corrupted or wrong key)."""


class ConfigurationError(NoteboardError):
    """Required configuration is absent; fatal."""
