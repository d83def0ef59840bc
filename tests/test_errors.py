from indexer_common.errors import as_chain


class _Error(Exception):
    def __str__(self) -> str:
        return "error"


def _parse_u32(text: str) -> int:
    if not text.isdigit():
        raise ValueError("invalid digit found in string")
    return int(text)


def test_as_chain():
    try:
        try:
            _parse_u32("-1")
        except ValueError as cause:
            raise _Error() from cause
    except _Error as error:
        assert as_chain(error) == "error: invalid digit found in string"


def test_as_chain_single():
    assert as_chain(RuntimeError("boom")) == "boom"


def test_as_chain_three_levels():
    inner = KeyError("inner")
    middle = ValueError("middle")
    middle.__cause__ = inner
    outer = RuntimeError("outer")
    outer.__cause__ = middle
    assert as_chain(outer) == "outer: middle: 'inner'"