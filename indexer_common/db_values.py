"""Conversions of optional database column values into domain values."""

from __future__ import annotations

from typing import Optional

from indexer_common.bytes import ByteArray

_U64_MAX = 2**64 - 1


def optional_u64(value: Optional[int]) -> Optional[int]:
    """Convert an optional signed column value into an optional u64."""
    if value is None:
        return None
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"out of range integral type conversion attempted: {value}")
    return value


def optional_byte_array(value: Optional[bytes], length: int) -> Optional[ByteArray]:
    """Convert an optional blob column value into an optional fixed-size ByteArray."""
    if value is None:
        return None
    return ByteArray.from_bytes(value, length)