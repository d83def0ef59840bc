import pytest

from indexer_common.protocol_version import (
    PROTOCOL_VERSION_000_012_000,
    ProtocolVersion,
    ScaleDecodeProtocolVersionError,
)


def test_protocol_version_display():
    assert str(ProtocolVersion(1_002_003)) == "1.2.3"
    assert str(ProtocolVersion(123_045)) == "0.123.45"


def test_parts():
    version = ProtocolVersion(1_002_003)
    assert (version.major, version.minor, version.patch) == (1, 2, 3)


def test_default_is_compatible_with_anything():
    assert ProtocolVersion().is_compatible(ProtocolVersion(5_006_007))
    assert ProtocolVersion().value == 1


def test_compatibility_by_major_and_minor():
    assert ProtocolVersion(12_000).is_compatible(ProtocolVersion(12_999))
    assert not ProtocolVersion(12_000).is_compatible(ProtocolVersion(13_000))
    assert not ProtocolVersion(1_012_000).is_compatible(PROTOCOL_VERSION_000_012_000)


def test_ordering():
    assert ProtocolVersion(12_000) < ProtocolVersion(13_000)


def test_from_scale_round_trip():
    encoded = (12_000).to_bytes(4, "little")
    assert ProtocolVersion.from_scale(encoded) == PROTOCOL_VERSION_000_012_000


def test_from_scale_too_short():
    with pytest.raises(ScaleDecodeProtocolVersionError):
        ProtocolVersion.from_scale(b"\x01\x02")


def test_from_int():
    assert ProtocolVersion.from_int(12_000) == PROTOCOL_VERSION_000_012_000
    with pytest.raises(ValueError):
        ProtocolVersion.from_int(-1)
    with pytest.raises(ValueError):
        ProtocolVersion.from_int(2**32)