"""AES-256-GCM encryption for data at rest."""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_SIZE = 32
NONCE_SIZE = 12


class EncryptionError(Exception):
    """Raised when data cannot be encrypted."""


class DecryptionError(Exception):
    """Raised when data cannot be decrypted."""


class EncryptionEngine:
    """Encrypts with AES-256-GCM; output is the nonce followed by the ciphertext."""

    def __init__(self, key: bytes) -> None:
        key = bytes(key)
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
        self._cipher = AESGCM(key)

    @staticmethod
    def generate_key() -> bytes:
        """Return a random 256-bit key."""
        return os.urandom(KEY_SIZE)

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt data under a fresh random nonce."""
        nonce = os.urandom(NONCE_SIZE)
        try:
            ciphertext = self._cipher.encrypt(nonce, bytes(plaintext), None)
        except (OverflowError, ValueError) as exc:
            raise EncryptionError(f"Encryption failed: {exc}") from exc
        return nonce + ciphertext

    def decrypt(self, data: bytes) -> bytes:
        """Decrypt nonce-prefixed ciphertext."""
        data = bytes(data)
        if len(data) < NONCE_SIZE:
            raise DecryptionError("Data too short for nonce")
        nonce, ciphertext = data[:NONCE_SIZE], data[NONCE_SIZE:]
        try:
            return self._cipher.decrypt(nonce, ciphertext, None)
        except (InvalidTag, ValueError) as exc:
            raise DecryptionError(f"Decryption failed: {exc or 'authentication tag mismatch'}") from exc