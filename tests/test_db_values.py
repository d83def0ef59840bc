import pytest

from indexer_common.bytes import ByteArrayLengthError
from indexer_common.db_values import optional_byte_array, optional_u64


def test_optional_u64_none():
    assert optional_u64(None) is None


@pytest.mark.parametrize("value", [0, 42, 2**63 - 1])
def test_optional_u64_keeps_value(value):
    assert optional_u64(value) == value


def test_optional_u64_rejects_negative():
    with pytest.raises(ValueError):
        optional_u64(-1)


def test_optional_byte_array_none():
    assert optional_byte_array(None, 32) is None


def test_optional_byte_array_round_trip():
    data = bytes(range(32))
    result = optional_byte_array(data, 32)
    assert bytes(result) == data
    assert len(result) == len(data)


def test_optional_byte_array_wrong_length():
    data = bytes(range(5))
    with pytest.raises(ByteArrayLengthError) as info:
        optional_byte_array(data, 32)
    assert info.value.expected == 32
    assert info.value.actual == len(data)