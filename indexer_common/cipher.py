"""Construction of the ChaCha20-Poly1305 cipher used for secrets at rest."""

from __future__ import annotations

import re

from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

_KEY_LEN = 32
_HEX = re.compile(r"(?:[0-9a-fA-F]{2})*")


class CipherError(ValueError):
    """Raised when a cipher cannot be made from the given secret."""

    def __init__(self, message: str, length: int | None = None) -> None:
        super().__init__(message)
        self.length = length


def make_cipher(secret: str) -> ChaCha20Poly1305:
    """Make a cipher from a hex-encoded secret; only its first 32 bytes are used."""
    text = secret[2:] if secret.startswith(("0x", "0X")) else secret
    if not _HEX.fullmatch(text):
        raise CipherError("cannot hex-decode secret")
    key = bytes.fromhex(text)
    if len(key) < _KEY_LEN:
        raise CipherError(
            f"secret must be at least 32 bytes long, but was {len(key)}", len(key)
        )
    return ChaCha20Poly1305(key[:_KEY_LEN])