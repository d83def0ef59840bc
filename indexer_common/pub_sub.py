"""Pub-sub messages and the publisher and subscriber interfaces."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from indexer_common.bytes import ByteArray
from indexer_common.domain import SessionId

_U32_MAX = 2**32 - 1
_SESSION_ID_LEN = 32

M = TypeVar("M", bound="Message")


@dataclass(frozen=True)
class Topic:
    """The topic a message type is published under."""

    name: str


class Message:
    """A pub-sub message; each subclass gets a topic named after the class."""

    TOPIC: ClassVar[Topic]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.TOPIC = Topic(cls.__name__)

    def to_json(self) -> dict[str, Any]:
        """Convert this message to a JSON-compatible mapping."""
        return dataclasses.asdict(self)

    @classmethod
    def from_json(cls: type[M], value: Any) -> M:
        """Build a message from a JSON-compatible mapping."""
        if not isinstance(value, Mapping):
            raise ValueError(f"cannot deserialize {cls.__name__} from {value!r}")
        try:
            return cls(**value)
        except (TypeError, ValueError) as error:
            raise ValueError(f"cannot deserialize {cls.__name__}: {error}") from error


@dataclass(frozen=True)
class BlockIndexed(Message):
    """Signals that a block has been indexed."""

    height: int
    caught_up: bool

    def __post_init__(self) -> None:
        if isinstance(self.height, bool) or not isinstance(self.height, int):
            raise TypeError("height must be an integer")
        if not 0 <= self.height <= _U32_MAX:
            raise ValueError(f"height {self.height} is out of range")
        if not isinstance(self.caught_up, bool):
            raise TypeError("caught_up must be a boolean")


@dataclass(frozen=True)
class WalletIndexed(Message):
    """Signals that a wallet has been indexed."""

    session_id: SessionId

    def __post_init__(self) -> None:
        if not isinstance(self.session_id, ByteArray):
            raise TypeError("session_id must be a ByteArray")
        if len(self.session_id) != _SESSION_ID_LEN:
            raise ValueError(
                f"session_id must be {_SESSION_ID_LEN} bytes, got {len(self.session_id)}"
            )

    def to_json(self) -> dict[str, Any]:
        return {"session_id": f"0x{self.session_id}"}

    @classmethod
    def from_json(cls, value: Any) -> WalletIndexed:
        if not isinstance(value, Mapping) or not isinstance(value.get("session_id"), str):
            raise ValueError(f"cannot deserialize WalletIndexed from {value!r}")
        text = value["session_id"]
        if text.startswith(("0x", "0X")):
            text = text[2:]
        try:
            session_id = ByteArray.from_bytes(bytes.fromhex(text), _SESSION_ID_LEN)
        except ValueError as error:
            raise ValueError(f"cannot deserialize WalletIndexed: {error}") from error
        return cls(session_id)


class Publisher(ABC):
    """Publishes messages."""

    @abstractmethod
    async def publish(self, message: Message) -> None:
        """Publish the given message."""


class Subscriber(ABC):
    """Subscribes to messages of a given type."""

    @abstractmethod
    def subscribe(self, message_type: type[M]) -> AsyncIterator[M]:
        """Return an async iterator over the messages of the given type."""


async def _no_messages() -> AsyncIterator[Any]:
    for message in ():
        yield message


class NoopSubscriber(Subscriber):
    """A subscriber that never receives anything."""

    def subscribe(self, message_type: type[M]) -> AsyncIterator[M]:
        return _no_messages()