"""Indexer building blocks: byte types, protocol versions, viewing keys, in-memory pub-sub and state storage, configuration, JSON logging and a SQLite pool."""

__version__ = "0.1.0"