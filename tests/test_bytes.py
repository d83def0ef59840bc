import pytest

from indexer_common.bytes import ByteArray, ByteArrayLengthError, ByteVec


def test_byte_vec():
    value = ByteVec()
    assert repr(value) == ""
    assert str(value) == ""

    value = ByteVec(bytes([0, 1, 2, 3]))
    assert repr(value) == "00010203"
    assert str(value) == "00010203"

    value = ByteVec([0, 1, 2, 3, 4])
    assert repr(value) == "00010203…"
    assert str(value) == "0001020304"


def test_byte_array():
    value = ByteArray(b"")
    assert repr(value) == ""
    assert str(value) == ""

    value = ByteArray(bytes([0, 1, 2, 3]))
    assert repr(value) == "00010203"
    assert str(value) == "00010203"

    value = ByteArray(bytes([0, 1, 2, 3, 4]))
    assert repr(value) == "00010203…"
    assert str(value) == "0001020304"


def test_byte_vec_bytes_and_len():
    value = ByteVec(b"\x01\x02\x03")
    assert bytes(value) == b"\x01\x02\x03"
    assert len(value) == 3
    assert value == ByteVec([1, 2, 3])
    assert hash(value) == hash(ByteVec([1, 2, 3]))


def test_byte_array_from_bytes():
    value = ByteArray.from_bytes(bytes(32), 32)
    assert len(value) == 32
    assert bytes(value) == bytes(32)


def test_byte_array_from_bytes_wrong_length():
    with pytest.raises(ByteArrayLengthError) as info:
        ByteArray.from_bytes(b"\x00\x01", 32)
    assert info.value.expected == 32
    assert info.value.actual == 2
    assert str(info.value) == "cannot create array of len 32 from slice of len 2"