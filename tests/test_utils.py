from __future__ import annotations

import pytest

from xorcracker.core.encoding import hex_decode
from xorcracker.core.utils import (
    fixed_xor,
    hamming_distance,
    is_valid_text,
    reduce_repeating_key,
    repeating_key_xor,
    single_byte_xor,
    transpose,
)


def test_fixed_xor():
    first = hex_decode("1c0111001f010100061a024b53535009181c")
    second = hex_decode("686974207468652062756c6c277320657965")
    assert fixed_xor(first, second) == hex_decode("746865206b696420646f6e277420706c6179")


def test_xor_is_an_involution():
    a = b"attack at dawn!"
    b = b"0123456789abcde"
    assert fixed_xor(fixed_xor(a, b), b) == a
    assert single_byte_xor(single_byte_xor(a, 0x5A), 0x5A) == a
    assert repeating_key_xor(repeating_key_xor(a, b"key"), b"key") == a


def test_fixed_xor_rejects_unequal_lengths():
    with pytest.raises(ValueError):
        fixed_xor(b"abc", b"ab")


def test_single_byte_xor_range():
    assert single_byte_xor(b"\x00\xff", 0x0F) == b"\x0f\xf0"
    with pytest.raises(ValueError):
        single_byte_xor(b"a", 256)


def test_repeating_key_xor_vector():
    plaintext = b"Burning 'em, if you ain't quick and nimble\nI go crazy when I hear a cymbal"
    assert repeating_key_xor(plaintext, b"ICE").hex() == (
        "0b3637272a2b2e63622c2e69692a23693a2a3c6324202d623d63343c2a26226324272765272a282b2f20"
        "430a652e2c652a3124333a653e2b2027630c692b20283165286326302e27282f"
    )


def test_repeating_key_xor_rejects_empty_key():
    with pytest.raises(ValueError):
        repeating_key_xor(b"abc", b"")


def test_hamming_distance():
    assert hamming_distance(b"this is a test", b"wokka wokka!!!") == 37


def test_hamming_distance_symmetric_and_zero_on_self():
    a, b = b"frequency", b"analysis!"
    assert hamming_distance(a, b) == hamming_distance(b, a)
    assert hamming_distance(a, a) == 0


def test_hamming_distance_rejects_unequal_lengths():
    with pytest.raises(ValueError):
        hamming_distance(b"a", b"ab")


def test_transpose_uneven_length():
    assert transpose(b"abcdefgh", 3) == [b"adg", b"beh", b"cf"]


def test_transpose_allocates_every_column():
    assert transpose(b"ab", 4) == [b"a", b"b", b"", b""]
    with pytest.raises(ValueError):
        transpose(b"ab", 0)


def test_reduce_repeating_key():
    assert reduce_repeating_key(b"ICEICE") == b"ICE"
    assert reduce_repeating_key(b"aaaa") == b"a"
    assert reduce_repeating_key(b"ICEIC") == b"ICEIC"
    assert reduce_repeating_key(b"") == b""


def test_is_valid_text():
    assert is_valid_text("café".encode("utf-8"))
    assert not is_valid_text(b"\x00\x80\x00")
