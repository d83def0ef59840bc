# indexer_common

Shared building blocks for an indexer service, written as a plain asyncio library.
It has no command-line entry point. You use it by importing its modules.

## Installation

```
pip install .
pip install ".[test]"   # with the test tools
```

## Modules

### `indexer_common.bytes`

- `ByteVec` and `ByteArray` are immutable byte containers.
- `str()` gives the full hex encoding.
- `repr()` gives the hex encoding when it is eight characters or fewer. Otherwise it gives the first eight characters followed by `…`.
- Both support `bytes()` and `len()`.
- `ByteArray.from_bytes(data, length)` raises `ByteArrayLengthError` when `data` is not exactly `length` bytes long.

### `indexer_common.protocol_version`

`ProtocolVersion(value)` encodes a version as `major * 1_000_000 + minor * 1_000 + patch`.

- The default value is `1`, which is 0.0.1.
- `str(ProtocolVersion(1_002_003))` is `"1.2.3"`.
- `is_compatible(other)` compares major and minor. The default version is compatible with any version.
- `from_scale(data)` decodes a little-endian u32. It raises `ScaleDecodeProtocolVersionError` on short input.
- `from_int(value)` rejects values outside the u32 range.
- `PROTOCOL_VERSION_000_012_000` is a predefined constant.

### `indexer_common.errors`

`as_chain(error)` joins an exception and its causes with `": "`. It follows `__cause__`, and also `__context__` unless that context is suppressed.

### `indexer_common.stream`

`flatten_chunks(chunks)` is an async generator. It yields the items of each chunk in turn, from either an async or a plain iterable of chunks. An exception raised by the source propagates at the point where it occurs.

### `indexer_common.cipher`

`make_cipher(secret)` builds a `ChaCha20Poly1305` cipher (from `cryptography`).

- `secret` is a hex string. A `0x` prefix is optional.
- Only the first 32 bytes are used.
- It raises `CipherError` if the string is not valid hex, or if it decodes to fewer than 32 bytes.

### `indexer_common.domain`

The enums are `ApplyStage`, `ContractActionVariant` and `NetworkId`. The defaults are `DEFAULT_APPLY_STAGE` (`FAILURE`) and `DEFAULT_CONTRACT_ACTION_VARIANT` (`DEPLOY`).

`NetworkId` can be built from a string in two ways. Both raise `UnknownNetworkIdError` for unknown input.

- `NetworkId.parse(text)` accepts the case-insensitive short forms `"undeployed"`, `"dev"`, `"test"` and `""` (main net).
- `NetworkId.from_name(name)` accepts the exact variant names, such as `"DevNet"`.

The module also defines type aliases: `SessionId`, `BlockAuthor`, `ContractAddress` and others.

### `indexer_common.viewing_key`

`ViewingKey` holds exactly 32 bytes. Other lengths raise `ViewingKeyLengthError`.

- `encrypt(id, cipher)` returns a random 12-byte nonce followed by the ciphertext. The UUID `id` is used as associated data.
- `ViewingKey.decrypt(data, id, cipher)` reverses `encrypt`. It raises `DecryptViewingKeyError` if decryption fails.
- `to_session_id()` returns the SHA-256 digest as a `ByteArray`.
- `repr()` and `str()` never show the key.

### `indexer_common.pub_sub`

- The message classes are `BlockIndexed(height, caught_up)` and `WalletIndexed(session_id)`.
- Each message class has a `TOPIC` named after the class.
- Messages have `to_json()` and `from_json(value)`.
- `Publisher` and `Subscriber` are the abstract interfaces.
- `NoopSubscriber` yields nothing.

### `indexer_common.in_mem_pub_sub`

`InMemPubSub` provides `publisher()` and `subscriber()`, which share bounded broadcast channels with a capacity of 42.

- `subscribe(message_type)` registers the subscription immediately and returns an async iterator.
- A subscriber that falls more than 42 messages behind gets a `SubscriberError`.
- A publishing failure raises `PublisherError`.

### `indexer_common.zswap_state_storage`

`ZswapStateStorage` is the interface. `InMemZswapStateStorage` is an in-memory implementation. It provides:

- `save(zswap_state, block_height, last_index)`
- `load_zswap_state()`, which returns `(state, block_height)` or `None`
- `load_last_index()`

### `indexer_common.config`

`load_config(environ=None)` reads the YAML file named by `CONFIG_FILE`, defaulting to `config.yaml`. It then overlays variables named `APP__...` and returns a plain `dict`.

- Names are stripped of the prefix, lower-cased and nested at each `__`.
- Values are read as booleans, integers or floats where they look like one.
- A missing or invalid file raises `ConfigError`.

### `indexer_common.telemetry`

- `TracingConfig`, `MetricsConfig` and `TelemetryConfig` each have a `from_mapping` constructor.
- `JsonFormatter` renders log records as one-line JSON.
- `init_logging(environ=None)` logs JSON to stdout.
  - It is filtered by directives in `LOG_LEVEL`, such as `info,some.module=debug`. Without directives, only errors are logged.
  - It raises `RuntimeError` if it is called twice.

### `indexer_common.sqlite_pool`

`SqlitePool.connect(SqliteConfig(cnn_url=...))` opens a single-connection async pool. The default URL is `sqlite::memory:`.

- A file database is created if it is missing.
- The URL query parameters accepted are `mode`, `cache`, `immutable` and `vfs`.
- The pool offers `execute`, `fetch_all`, `close` and `async with`.
- Failures raise `SqlitePoolError`.

### `indexer_common.db_values`

`optional_u64(value)` and `optional_byte_array(value, length)` convert nullable column values. `None` passes through.

## Example

```python
import asyncio
from indexer_common.in_mem_pub_sub import InMemPubSub
from indexer_common.pub_sub import WalletIndexed
from indexer_common.bytes import ByteArray

async def demo():
    pub_sub = InMemPubSub()
    messages = pub_sub.subscriber().subscribe(WalletIndexed)
    message = WalletIndexed(session_id=ByteArray(bytes(32)))
    await pub_sub.publisher().publish(message)
    print(await messages.__anext__())

asyncio.run(demo())
```

## What this package does not do

- It does not run an indexer, serve an API or talk to a chain node.
- It ships no database schema or migrations.
- `SqlitePool` only runs the statements you give it.
- The tracing and metrics configurations are parsed only. No trace exporter or metrics endpoint is started.
- Pub-sub and zswap state storage exist only in memory. There is no networked message broker or object store.

## Tests

```
pytest
```