"""Stream helpers."""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import TypeVar, Union

T = TypeVar("T")


async def flatten_chunks(
    chunks: Union[AsyncIterable[Iterable[T]], Iterable[Iterable[T]]],
) -> AsyncIterator[T]:
    """Yield the items of each chunk in turn; an error from the source is re-raised in place."""
    if isinstance(chunks, AsyncIterable):
        async for chunk in chunks:
            for item in chunk:
                yield item
    else:
        for chunk in chunks:
            for item in chunk:
                yield item