"""Variable-length quantities used for delta-times and payload lengths."""
from __future__ import annotations

from typing import Callable

from .errors import MalformedLengthError, TruncatedStreamError

MAX_VARLEN_BYTES = 4
MAX_VARLEN_VALUE = 0x0FFFFFFF


def _check_range(value: int) -> None:
    if value < 0:
        raise ValueError(f"Length must be non-negative integer: {value}")
    if value > MAX_VARLEN_VALUE:
        raise ValueError(f"Value 0x{value:X} does not fit in a four-byte variable-length quantity")


def length(value: int) -> int:
    """Return how many bytes :func:`encode` produces for ``value``."""

    _check_range(value)
    if value == 0:
        return 1
    count = 0
    while value:
        count += 1
        value >>= 7
    return count


def encode(value: int) -> bytes:
    _check_range(value)
    buffer = [value & 0x7F]
    value >>= 7
    while value:
        buffer.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(buffer))


def decode(read_byte: Callable[[], int]) -> int:
    """Decode a quantity by pulling bytes from ``read_byte``.

    At most four bytes are consumed.  A fourth byte that still has its
    continuation bit set raises :class:`MalformedLengthError`.
    """

    value = 0
    for _ in range(MAX_VARLEN_BYTES):
        byte = read_byte()
        value = (value << 7) | (byte & 0x7F)
        if byte & 0x80 == 0:
            return value
    raise MalformedLengthError("Variable-length quantity exceeds the 4-byte limitation")


def decode_bytes(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode from an in-memory buffer, returning ``(value, bytes_consumed)``."""

    view = memoryview(data)
    position = offset

    def read_byte() -> int:
        nonlocal position
        if position >= len(view):
            raise TruncatedStreamError("Unexpected end of variable-length quantity", position)
        byte = view[position]
        position += 1
        return byte

    try:
        value = decode(read_byte)
    except MalformedLengthError as exc:
        raise MalformedLengthError(exc.detail, position) from None
    return value, position - offset


__all__ = ["MAX_VARLEN_BYTES", "MAX_VARLEN_VALUE", "decode", "decode_bytes", "encode", "length"]
