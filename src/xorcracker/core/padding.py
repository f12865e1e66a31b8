from __future__ import annotations


def pkcs7_pad(block: bytes, block_size: int) -> bytes:
    """
    PKCS#7: append n bytes of value n, where n = block_size - len(block) % block_size.
    Input already aligned to block_size gains a full block of padding.
    """
    if not 1 <= block_size <= 255:
        raise ValueError(f"PKCS#7 block size must be 1..255, got {block_size}.")
    padding = block_size - (len(block) % block_size)
    return bytes(block) + bytes([padding]) * padding
