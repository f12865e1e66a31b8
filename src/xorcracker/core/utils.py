from __future__ import annotations

from itertools import cycle

# _XOR_TABLES[k] maps every byte b to b ^ k, for use with bytes.translate
_XOR_TABLES = tuple(bytes(b ^ k for b in range(256)) for k in range(256))

_POPCOUNT = tuple(bin(b).count("1") for b in range(256))


def fixed_xor(first: bytes, second: bytes) -> bytes:
    """XOR two equal-length buffers position by position."""
    if len(first) != len(second):
        raise ValueError(f"Buffers differ in length ({len(first)} != {len(second)}).")
    return bytes(a ^ b for a, b in zip(first, second))


def single_byte_xor(data: bytes, key: int) -> bytes:
    if not 0 <= key <= 255:
        raise ValueError(f"Single-byte key must be 0..255, got {key}.")
    return data.translate(_XOR_TABLES[key])


def repeating_key_xor(data: bytes, key: bytes) -> bytes:
    """Encrypt or decrypt: the key is cycled to the length of the data."""
    if not key:
        raise ValueError("Repeating-key XOR needs a non-empty key.")
    return bytes(b ^ k for b, k in zip(data, cycle(key)))


def hamming_distance(first: bytes, second: bytes) -> int:
    """Number of differing bits between two equal-length buffers."""
    if len(first) != len(second):
        raise ValueError(f"Buffers differ in length ({len(first)} != {len(second)}).")
    return sum(_POPCOUNT[a ^ b] for a, b in zip(first, second))


def transpose(data: bytes, keysize: int) -> list[bytes]:
    """
    Split data into keysize columns: byte i lands in column i % keysize.
    Every column exists even when the data is shorter than keysize; the
    trailing columns are simply shorter (or empty).
    """
    if keysize < 1:
        raise ValueError(f"Key size must be positive, got {keysize}.")
    return [data[i::keysize] for i in range(keysize)]


def reduce_repeating_key(key: bytes) -> bytes:
    """
    If a key is a perfect repetition of a shorter pattern, reduce it.
    Example: b"ICEICE" -> b"ICE"
    """
    n = len(key)
    for p in range(1, n // 2 + 1):
        if n % p != 0:
            continue
        base = key[:p]
        if base * (n // p) == key:
            return base
    return key


def is_valid_text(data: bytes) -> bool:
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True
