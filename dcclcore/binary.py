"""Hexadecimal and base64 text encodings, plus small logarithm helpers."""

from __future__ import annotations

import base64
import math
import string

__all__ = ["hex_decode", "hex_encode", "b64_encode", "b64_decode", "ceil_log2", "log2"]

_UINT64_MASK = (1 << 64) - 1
_B64_LINE_LENGTH = 72
_B64_ALPHABET = frozenset(string.ascii_letters + string.digits + "+/")


def _nibble(char: str) -> int:
    """Value of one hexadecimal digit; characters that are not hex digits count as zero."""
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "F":
        return ord(char) - ord("A") + 10
    if "a" <= char <= "f":
        return ord(char) - ord("a") + 10
    return 0


def _as_bytes(data: bytes | bytearray | memoryview | str) -> bytes:
    if isinstance(data, str):
        return data.encode("latin-1")
    return bytes(data)


def hex_decode(text: str) -> bytes:
    """Decode a hexadecimal string into bytes; the first two digits form the first byte.

    For an odd number of digits, the first digit alone forms the low nibble of
    the first byte. Characters that are not hex digits contribute zero.
    """
    if len(text) % 2:
        text = "0" + text
    return bytes(
        (_nibble(high) << 4) | _nibble(low) for high, low in zip(text[::2], text[1::2])
    )


def hex_encode(data: bytes | bytearray | memoryview | str, upper_case: bool = False) -> str:
    """Encode bytes as a hexadecimal string, two digits per byte, first byte first."""
    encoded = _as_bytes(data).hex()
    return encoded.upper() if upper_case else encoded


def b64_encode(data: bytes | bytearray | memoryview | str) -> str:
    """Encode bytes as base64 text, wrapped every 72 characters and ending in a newline."""
    raw = _as_bytes(data)
    full_length = len(raw) - len(raw) % 3
    body = base64.b64encode(raw[:full_length]).decode("ascii")
    tail = base64.b64encode(raw[full_length:]).decode("ascii")

    chunks = (
        body[start:start + _B64_LINE_LENGTH]
        for start in range(0, len(body), _B64_LINE_LENGTH)
    )
    wrapped = "".join(
        chunk + "\n" if len(chunk) == _B64_LINE_LENGTH else chunk for chunk in chunks
    )
    return wrapped + tail + "\n"


def b64_decode(text: str | bytes) -> bytes:
    """Decode base64 text, skipping any character outside the base64 alphabet.

    Padding is optional; a trailing group of two or three characters yields
    the partial bytes it holds, and a lone trailing character is dropped.
    """
    if isinstance(text, (bytes, bytearray, memoryview)):
        text = bytes(text).decode("latin-1")
    cleaned = "".join(char for char in text if char in _B64_ALPHABET)
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def ceil_log2(value: int | float) -> int:
    """Return ceil(log2(value)) for a value taken as an unsigned 64-bit integer.

    Floating-point values are first rounded up. Zero and one both give zero.
    """
    if isinstance(value, float):
        value = math.ceil(value)
    unsigned = int(value) & _UINT64_MASK
    if unsigned == 0:
        return 0
    return (unsigned - 1).bit_length()


def log2(value: float) -> float:
    """Base-2 logarithm computed as ln(value) / ln(2)."""
    return math.log(value) / math.log(2)