"""Byte containers that render as hex strings."""

from __future__ import annotations

from dataclasses import dataclass

_DEBUG_HEX_LIMIT = 8


def _short_hex(data: bytes) -> str:
    encoded = data.hex()
    if len(encoded) <= _DEBUG_HEX_LIMIT:
        return encoded
    return f"{encoded[:_DEBUG_HEX_LIMIT]}…"


class ByteArrayLengthError(ValueError):
    """Raised when bytes of the wrong length are used for a fixed-size array."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"cannot create array of len {expected} from slice of len {actual}"
        )
        self.expected = expected
        self.actual = actual


@dataclass(frozen=True, repr=False)
class ByteVec:
    """A variable-length byte sequence; str gives the full hex, repr at most eight hex digits."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return _short_hex(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True, repr=False)
class ByteArray:
    """A fixed-length byte sequence; str gives the full hex, repr at most eight hex digits."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def from_bytes(cls, data: bytes, length: int) -> ByteArray:
        """Create an array of exactly ``length`` bytes from ``data``."""
        data = bytes(data)
        if len(data) != length:
            raise ByteArrayLengthError(length, len(data))
        return cls(data)

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return _short_hex(self.data)

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)