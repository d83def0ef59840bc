"""In-memory pub-sub based on bounded broadcast channels."""

from __future__ import annotations

import asyncio
import json
import weakref
from collections import deque
from collections.abc import AsyncIterator
from typing import TypeVar

from indexer_common.pub_sub import (
    BlockIndexed,
    Message,
    Publisher,
    Subscriber,
    Topic,
    WalletIndexed,
)

_CAPACITY = 42

M = TypeVar("M", bound=Message)


class PublisherError(Exception):
    """Raised when a message cannot be published."""


class SubscriberError(Exception):
    """Raised when a message cannot be received."""


class _Lagged(Exception):
    def __init__(self, missed: int) -> None:
        super().__init__(f"receiver lagged behind by {missed} messages")
        self.missed = missed


class _Receiver:
    """One subscription; keeps at most `capacity` unread values."""

    def __init__(self, capacity: int) -> None:
        self._buffer: deque[str] = deque()
        self._capacity = capacity
        self._missed = 0
        self._ready = asyncio.Event()

    def push(self, value: str) -> None:
        if len(self._buffer) >= self._capacity:
            self._buffer.popleft()
            self._missed += 1
        self._buffer.append(value)
        self._ready.set()

    async def recv(self) -> str:
        while True:
            if self._missed:
                missed, self._missed = self._missed, 0
                raise _Lagged(missed)
            if self._buffer:
                return self._buffer.popleft()
            self._ready.clear()
            await self._ready.wait()


class _Channel:
    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._receivers: weakref.WeakSet[_Receiver] = weakref.WeakSet()

    def subscribe(self) -> _Receiver:
        receiver = _Receiver(self._capacity)
        self._receivers.add(receiver)
        return receiver

    def unsubscribe(self, receiver: _Receiver) -> None:
        self._receivers.discard(receiver)

    def send(self, value: str) -> None:
        for receiver in list(self._receivers):
            receiver.push(value)


class InMemPubSub:
    """Factory for in-memory publishers and subscribers sharing the same channels."""

    def __init__(self) -> None:
        self._channels: dict[Topic, _Channel] = {
            BlockIndexed.TOPIC: _Channel(_CAPACITY),
            WalletIndexed.TOPIC: _Channel(_CAPACITY),
        }

    def publisher(self) -> InMemPublisher:
        return InMemPublisher(self)

    def subscriber(self) -> InMemSubscriber:
        return InMemSubscriber(self)


class InMemPublisher(Publisher):
    """Publishes messages to an InMemPubSub."""

    def __init__(self, pub_sub: InMemPubSub) -> None:
        self._pub_sub = pub_sub

    async def publish(self, message: Message) -> None:
        try:
            value = json.dumps(message.to_json())
        except (TypeError, ValueError) as error:
            raise PublisherError("cannot JSON serialize message") from error

        topic = type(message).TOPIC
        channel = self._pub_sub._channels.get(topic)
        if channel is None:
            raise PublisherError(f"unexpected topic {topic.name}")
        channel.send(value)


class InMemSubscriber(Subscriber):
    """Subscribes to messages of an InMemPubSub.

    The subscription starts when subscribe is called, not when iteration starts.
    """

    def __init__(self, pub_sub: InMemPubSub) -> None:
        self._pub_sub = pub_sub

    def subscribe(self, message_type: type[M]) -> AsyncIterator[M]:
        topic = message_type.TOPIC
        channel = self._pub_sub._channels.get(topic)
        if channel is None:
            raise SubscriberError(f"unexpected topic {topic.name}")
        receiver = channel.subscribe()
        return _messages(channel, receiver, message_type)


async def _messages(
    channel: _Channel, receiver: _Receiver, message_type: type[M]
) -> AsyncIterator[M]:
    try:
        while True:
            try:
                value = await receiver.recv()
            except _Lagged as error:
                raise SubscriberError("cannot receive") from error
            try:
                message = message_type.from_json(json.loads(value))
            except ValueError as error:
                raise SubscriberError("cannot JSON deserialize message") from error
            yield message
    finally:
        channel.unsubscribe(receiver)