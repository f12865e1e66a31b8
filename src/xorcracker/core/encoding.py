from __future__ import annotations

import base64
import binascii
import string

from .errors import DecodeError

_BASE64_CHARS = set(string.ascii_letters + string.digits + "+/=")
_HEX_CHARS = set("0123456789abcdefABCDEF")

ENCODINGS = ("auto", "hex", "base64", "raw")


def _compact(text: str) -> str:
    # Wrapped hex/base64 (one chunk per line) is common in files
    return "".join(text.split())


def hex_encode(data: bytes) -> str:
    return data.hex()


def hex_decode(text: str) -> bytes:
    s = _compact(text)
    bad = sorted({ch for ch in s if ch not in _HEX_CHARS})
    if bad:
        raise DecodeError(f"Invalid hex character(s): {''.join(bad)!r}")
    if len(s) % 2 != 0:
        raise DecodeError(f"Hex string has odd length ({len(s)}).")
    return bytes.fromhex(s)


def base64_encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def base64_decode(text: str) -> bytes:
    s = _compact(text)
    try:
        return base64.b64decode(s, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64: {e}") from e


def hex_to_base64(text: str) -> str:
    return base64_encode(hex_decode(text))


def guess_encoding(text: str) -> str:
    """Return "hex", "base64" or "raw" for a textual ciphertext."""
    s = _compact(text)
    if not s:
        return "raw"

    # Hex first: every hex string is also valid base64 alphabet
    if set(s) <= _HEX_CHARS and len(s) % 2 == 0:
        return "hex"

    if set(s) <= _BASE64_CHARS and len(s) % 4 == 0:
        return "base64"

    return "raw"


def decode_ciphertext(data: bytes, encoding: str = "auto") -> bytes:
    """
    Turn user-supplied ciphertext into raw bytes.

    data is the ciphertext as read (a file's bytes, or a CLI argument encoded
    as UTF-8); encoding is one of ENCODINGS.
    """
    enc = encoding.lower().strip()
    if enc not in ENCODINGS:
        raise ValueError(f"Unknown encoding '{encoding}'. Available: {', '.join(ENCODINGS)}")
    if enc == "raw":
        return data

    try:
        text = data.decode("ascii")
    except UnicodeDecodeError as e:
        if enc == "auto":
            return data
        raise DecodeError(f"{enc} input must be ASCII text.") from e

    if enc == "auto":
        enc = guess_encoding(text)
        if enc == "raw":
            return data

    if enc == "hex":
        return hex_decode(text)
    return base64_decode(text)
