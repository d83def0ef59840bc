import asyncio
from dataclasses import dataclass

import pytest

from indexer_common.bytes import ByteArray
from indexer_common.in_mem_pub_sub import (
    InMemPubSub,
    PublisherError,
    SubscriberError,
)
from indexer_common.pub_sub import BlockIndexed, Message, WalletIndexed


@dataclass(frozen=True)
class Unrouted(Message):
    value: int


@pytest.mark.asyncio
async def test_publish_subscribe():
    pub_sub = InMemPubSub()
    await asyncio.sleep(0.05)

    block_indexed = BlockIndexed(height=123, caught_up=False)
    await pub_sub.publisher().publish(block_indexed)

    subscriber = pub_sub.subscriber()
    messages = subscriber.subscribe(WalletIndexed)

    wallet_indexed = WalletIndexed(ByteArray(bytes(32)))
    await pub_sub.publisher().publish(wallet_indexed)

    message = await asyncio.wait_for(messages.__anext__(), timeout=1)
    assert message == wallet_indexed


@pytest.mark.asyncio
async def test_all_subscribers_receive_in_order():
    pub_sub = InMemPubSub()
    first = pub_sub.subscriber().subscribe(BlockIndexed)
    second = pub_sub.subscriber().subscribe(BlockIndexed)
    publisher = pub_sub.publisher()
    for height in range(3):
        await publisher.publish(BlockIndexed(height=height, caught_up=height == 2))

    for messages in (first, second):
        received = [await messages.__anext__() for _ in range(3)]
        assert [m.height for m in received] == [0, 1, 2]
        assert received[-1].caught_up is True


@pytest.mark.asyncio
async def test_messages_published_before_subscribing_are_not_received():
    pub_sub = InMemPubSub()
    await pub_sub.publisher().publish(BlockIndexed(height=1, caught_up=False))
    messages = pub_sub.subscriber().subscribe(BlockIndexed)
    await pub_sub.publisher().publish(BlockIndexed(height=2, caught_up=False))
    message = await asyncio.wait_for(messages.__anext__(), timeout=1)
    assert message.height == 2


@pytest.mark.asyncio
async def test_subscriber_waits_for_later_message():
    pub_sub = InMemPubSub()
    messages = pub_sub.subscriber().subscribe(BlockIndexed)
    pending = asyncio.ensure_future(messages.__anext__())
    await asyncio.sleep(0.01)
    assert not pending.done()
    await pub_sub.publisher().publish(BlockIndexed(height=7, caught_up=True))
    message = await asyncio.wait_for(pending, timeout=1)
    assert message == BlockIndexed(height=7, caught_up=True)


@pytest.mark.asyncio
async def test_full_buffer_does_not_lag():
    pub_sub = InMemPubSub()
    messages = pub_sub.subscriber().subscribe(BlockIndexed)
    for height in range(42):
        await pub_sub.publisher().publish(BlockIndexed(height=height, caught_up=False))
    received = [await messages.__anext__() for _ in range(42)]
    assert [m.height for m in received] == list(range(42))


@pytest.mark.asyncio
async def test_lagging_subscriber_gets_error():
    pub_sub = InMemPubSub()
    messages = pub_sub.subscriber().subscribe(BlockIndexed)
    for height in range(43):
        await pub_sub.publisher().publish(BlockIndexed(height=height, caught_up=False))
    with pytest.raises(SubscriberError):
        await messages.__anext__()


@pytest.mark.asyncio
async def test_unknown_topic_cannot_be_published():
    pub_sub = InMemPubSub()
    with pytest.raises(PublisherError):
        await pub_sub.publisher().publish(Unrouted(1))


def test_unknown_topic_cannot_be_subscribed():
    pub_sub = InMemPubSub()
    with pytest.raises(SubscriberError):
        pub_sub.subscriber().subscribe(Unrouted)