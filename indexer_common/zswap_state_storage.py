"""Storage for the raw zswap state."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from indexer_common.bytes import ByteVec

RawZswapState = ByteVec

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


class ZswapStateStorage(ABC):
    """Abstraction for zswap state storage."""

    @abstractmethod
    async def load_last_index(self) -> Optional[int]:
        """Load the last index."""

    @abstractmethod
    async def load_zswap_state(self) -> Optional[Tuple[RawZswapState, int]]:
        """Load the raw zswap state and its block height."""

    @abstractmethod
    async def save(
        self,
        zswap_state: RawZswapState,
        block_height: int,
        last_index: Optional[int],
    ) -> None:
        """Save the raw zswap state with its block height and last index."""


@dataclass
class _Data:
    zswap_state: Optional[Tuple[RawZswapState, int]] = None
    last_index: Optional[int] = None


class InMemZswapStateStorage(ZswapStateStorage):
    """In-memory zswap state storage."""

    def __init__(self) -> None:
        self._data = _Data()

    async def load_last_index(self) -> Optional[int]:
        return self._data.last_index

    async def load_zswap_state(self) -> Optional[Tuple[RawZswapState, int]]:
        return self._data.zswap_state

    async def save(
        self,
        zswap_state: RawZswapState,
        block_height: int,
        last_index: Optional[int],
    ) -> None:
        if not 0 <= block_height <= _U32_MAX:
            raise ValueError(f"block height {block_height} is out of range")
        if last_index is not None and not 0 <= last_index <= _U64_MAX:
            raise ValueError(f"last index {last_index} is out of range")
        self._data = _Data(
            zswap_state=(ByteVec(bytes(zswap_state)), block_height),
            last_index=last_index,
        )