from __future__ import annotations

from hr_timekeeping.common.crypto import FernetFieldCipher, decrypt_or_marker, encrypt_optional
from hr_timekeeping.core.constants import DECRYPTION_ERROR


def test_ciphertext_is_opaque_and_reversible(cipher):
    token = cipher.encrypt("Building 7, desk 12")
    assert "Building" not in token
    assert cipher.decrypt(token) == "Building 7, desk 12"


def test_empty_values_stay_empty(cipher):
    assert encrypt_optional(cipher, None) is None
    assert encrypt_optional(cipher, "") is None
    assert decrypt_or_marker(cipher, None) is None


def test_foreign_ciphertext_becomes_marker(cipher):
    other = FernetFieldCipher(FernetFieldCipher.generate_key())
    token = other.encrypt("secret")

    assert decrypt_or_marker(cipher, token, context="test") == DECRYPTION_ERROR
    assert decrypt_or_marker(cipher, "garbage") == DECRYPTION_ERROR
