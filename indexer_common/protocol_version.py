"""Runtime specification version of the chain."""

from __future__ import annotations

from dataclasses import dataclass

_U32_MAX = 2**32 - 1


class ScaleDecodeProtocolVersionError(ValueError):
    """Raised when a protocol version cannot be SCALE decoded."""

    def __init__(self) -> None:
        super().__init__("cannot SCALE decode protocol version")


@dataclass(frozen=True, order=True)
class ProtocolVersion:
    """A version encoded as major * 1_000_000 + minor * 1_000 + patch; defaults to 0.0.1."""

    value: int = 1

    def __post_init__(self) -> None:
        if not 0 <= self.value <= _U32_MAX:
            raise ValueError(f"protocol version {self.value} is out of range")

    @property
    def major(self) -> int:
        return self.value // 1_000_000

    @property
    def minor(self) -> int:
        return self.value // 1_000 % 1_000

    @property
    def patch(self) -> int:
        return self.value % 1_000

    def is_compatible(self, other: ProtocolVersion) -> bool:
        """Compatible if major and minor are equal; the default (1) is compatible with any."""
        return self.value == 1 or (
            self.major == other.major and self.minor == other.minor
        )

    @classmethod
    def from_scale(cls, data: bytes) -> ProtocolVersion:
        """Decode a SCALE encoded little-endian u32, as found in block headers."""
        if len(data) < 4:
            raise ScaleDecodeProtocolVersionError()
        return cls(int.from_bytes(bytes(data[:4]), "little"))

    @classmethod
    def from_int(cls, value: int) -> ProtocolVersion:
        """Create a version from a signed integer, rejecting values outside u32."""
        if not 0 <= value <= _U32_MAX:
            raise ValueError(f"out of range integral type conversion attempted: {value}")
        return cls(value)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


PROTOCOL_VERSION_000_012_000 = ProtocolVersion(12_000)