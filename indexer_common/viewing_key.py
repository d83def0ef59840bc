"""Viewing keys, which are kept encrypted at rest."""

from __future__ import annotations

import hashlib
import os
import uuid
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from indexer_common.bytes import ByteArray
from indexer_common.domain import SessionId

VIEWING_KEY_LEN = 32
_NONCE_LEN = 12


class ViewingKeyLengthError(ValueError):
    """Raised when bytes of the wrong length are used as a viewing key."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"cannot create viewing key of len {expected} from slice of len {actual}"
        )
        self.expected = expected
        self.actual = actual


class DecryptViewingKeyError(ValueError):
    """Raised when encrypted bytes cannot be turned back into a viewing key."""

    def __init__(self, message: str, length: int | None = None) -> None:
        super().__init__(message)
        self.length = length


@dataclass(frozen=True, repr=False)
class ViewingKey:
    """A secret key that is encrypted at rest and never shown in clear text."""

    data: bytes

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != VIEWING_KEY_LEN:
            raise ViewingKeyLengthError(VIEWING_KEY_LEN, len(data))
        object.__setattr__(self, "data", data)

    @classmethod
    def from_bytes(cls, data: bytes) -> ViewingKey:
        """Create a viewing key from exactly VIEWING_KEY_LEN bytes."""
        return cls(bytes(data))

    @classmethod
    def decrypt(
        cls,
        nonce_and_ciphertext: bytes,
        id: uuid.UUID,
        cipher: ChaCha20Poly1305,
    ) -> ViewingKey:
        """Decrypt a nonce followed by ciphertext, authenticated with the given ID."""
        data = bytes(nonce_and_ciphertext)
        if len(data) < _NONCE_LEN:
            raise DecryptViewingKeyError("cannot decrypt secret")
        nonce, ciphertext = data[:_NONCE_LEN], data[_NONCE_LEN:]
        try:
            plaintext = cipher.decrypt(nonce, ciphertext, id.bytes)
        except InvalidTag as error:
            raise DecryptViewingKeyError("cannot decrypt secret") from error
        if len(plaintext) != VIEWING_KEY_LEN:
            raise DecryptViewingKeyError(
                f"cannot create byte array of len {VIEWING_KEY_LEN} "
                f"from slice of len {len(plaintext)}",
                len(plaintext),
            )
        return cls(plaintext)

    def encrypt(self, id: uuid.UUID, cipher: ChaCha20Poly1305) -> bytes:
        """Encrypt with a random nonce; the result is the nonce followed by ciphertext."""
        nonce = os.urandom(_NONCE_LEN)
        return nonce + cipher.encrypt(nonce, self.data, id.bytes)

    def to_session_id(self) -> SessionId:
        """The session ID for this key: the SHA-256 digest of its bytes."""
        return ByteArray(hashlib.sha256(self.data).digest())

    def __repr__(self) -> str:
        return "ViewingKey(REDACTED)"

    def __str__(self) -> str:
        return "REDACTED"