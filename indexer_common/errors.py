"""Helpers for working with exceptions."""

from __future__ import annotations


def _source(error: BaseException) -> BaseException | None:
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def as_chain(error: BaseException) -> str:
    """Format an error and all its causes as a colon separated chain."""
    parts = []
    seen = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        parts.append(str(current))
        current = _source(current)
    return ": ".join(parts)