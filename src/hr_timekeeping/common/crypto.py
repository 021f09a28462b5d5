"""Field-level encryption for confidential free text (locations, notes, descriptions)."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from cryptography.fernet import Fernet, InvalidToken

from ..core.constants import DECRYPTION_ERROR

logger = logging.getLogger(__name__)


class FieldCipher(Protocol):
    def encrypt(self, plaintext: str) -> str:
        raise NotImplementedError

    def decrypt(self, ciphertext: str) -> str:
        raise NotImplementedError


class FernetFieldCipher(FieldCipher):
    def __init__(self, key: str | bytes):
        self._fernet = Fernet(key)

    @staticmethod
    def generate_key() -> str:
        return Fernet.generate_key().decode("ascii")

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        return self._fernet.decrypt(ciphertext.encode("ascii")).decode("utf-8")


def encrypt_optional(cipher: FieldCipher, value: Optional[str]) -> Optional[str]:
    return cipher.encrypt(value) if value else None


def decrypt_or_marker(cipher: FieldCipher, value: Optional[str], *, context: str = "") -> Optional[str]:
    """Decrypt for an authorized read; unreadable ciphertext becomes a marker."""
    if not value:
        return value
    try:
        return cipher.decrypt(value)
    except (InvalidToken, ValueError):
        logger.warning("Could not decrypt field %s", context or "<unknown>")
        return DECRYPTION_ERROR
