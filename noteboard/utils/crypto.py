"""AES-256-GCM secret encryption/decryption."""

from __future__ import annotations

import hashlib
import logging
import os
from typing import NamedTuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from noteboard.config import Settings
from noteboard.errors import ConfigurationError, CryptoIntegrityError

logger = logging.getLogger(__name__)

NONCE_SIZE = 12  # 96-bit nonce for GCM
TAG_SIZE = 16
KEY_SIZE = 32

# Local development only. Never accepted when env=production.
DEV_FALLBACK_PASSPHRASE = "noteboard-dev-master-key"


class Sealed(NamedTuple):
    """Output of one encryption call; the three parts only make sense together."""

    ciphertext: bytes
    nonce: bytes
    tag: bytes


def derive_key(passphrase: str) -> bytes:
    """One-way derivation of a 256-bit key from the configured passphrase."""
    return hashlib.sha256(passphrase.encode("utf-8")).digest()


def load_master_key(settings: Settings) -> bytes:
    """Derive the master key, refusing to fall back to the dev passphrase in production."""
    if settings.master_key:
        return derive_key(settings.master_key)

    if settings.is_production:
        raise ConfigurationError(
            "NOTEBOARD_MASTER_KEY must be set when NOTEBOARD_ENV=production"
        )

    logger.warning(
        "!!! NOTEBOARD_MASTER_KEY is not set — using the built-in development "
        "passphrase. Secrets stored now are NOT protected. !!!"
    )
    return derive_key(DEV_FALLBACK_PASSPHRASE)


class SecretCipher:
    """Holds the derived key for the process lifetime and seals/opens values."""

    def __init__(self, key: bytes) -> None:
        if len(key) != KEY_SIZE:
            raise ConfigurationError(f"Master key must be {KEY_SIZE} bytes, got {len(key)}")
        self._aead = AESGCM(key)

    @classmethod
    def from_settings(cls, settings: Settings) -> SecretCipher:
        return cls(load_master_key(settings))

    def encrypt(self, plaintext: str) -> Sealed:
        nonce = os.urandom(NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return Sealed(ciphertext=sealed[:-TAG_SIZE], nonce=nonce, tag=sealed[-TAG_SIZE:])

    def decrypt(self, ciphertext: bytes, nonce: bytes, tag: bytes) -> str:
        try:
            plaintext = self._aead.decrypt(nonce, ciphertext + tag, None)
        except (InvalidTag, ValueError) as exc:
            raise CryptoIntegrityError("Secret failed authentication on decrypt") from exc
        return plaintext.decode("utf-8")

    def __repr__(self) -> str:
        return "SecretCipher(key=<redacted>)"
