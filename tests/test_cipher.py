import pytest

from indexer_common.cipher import CipherError, make_cipher

NONCE = bytes(12)
KEY_HEX = bytes(range(32)).hex()


def test_round_trip():
    cipher = make_cipher(KEY_HEX)
    ciphertext = cipher.encrypt(NONCE, b"message", b"aad")
    assert cipher.decrypt(NONCE, ciphertext, b"aad") == b"message"


def test_only_first_32_bytes_used():
    long_cipher = make_cipher(KEY_HEX + "ff" * 32)
    short_cipher = make_cipher(KEY_HEX)
    ciphertext = long_cipher.encrypt(NONCE, b"message", None)
    assert short_cipher.decrypt(NONCE, ciphertext, None) == b"message"


def test_hex_prefix_accepted():
    prefixed = make_cipher("0x" + KEY_HEX)
    plain = make_cipher(KEY_HEX)
    assert plain.decrypt(NONCE, prefixed.encrypt(NONCE, b"x", None), None) == b"x"


def test_too_short():
    with pytest.raises(CipherError) as info:
        make_cipher("00" * 16)
    assert info.value.length == 16
    assert str(info.value) == "secret must be at least 32 bytes long, but was 16"


@pytest.mark.parametrize("secret", ["zz" * 32, "0" * 63])
def test_invalid_hex(secret):
    with pytest.raises(CipherError, match="cannot hex-decode secret"):
        make_cipher(secret)