"""Byte source used by the SMF reader."""
from __future__ import annotations

from typing import BinaryIO

from . import varlen
from .errors import MalformedLengthError, TruncatedStreamError


class SmfByteSource:
    """Read bytes from a binary stream with a one-byte lookahead.

    ``position`` counts every byte taken from the stream.  ``chunk_consumed``
    counts bytes consumed since the last :meth:`reset_chunk_counter`; a peeked
    byte is only counted once it is actually consumed.
    """

    __slots__ = ("_stream", "_peeked", "_position", "chunk_consumed")

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._peeked: int | None = None
        self._position = 0
        self.chunk_consumed = 0

    def tell(self) -> int:
        return self._position

    def reset_chunk_counter(self) -> None:
        self.chunk_consumed = 0

    def peek_byte(self) -> int:
        if self._peeked is None:
            data = self._stream.read(1)
            if not data:
                raise TruncatedStreamError("Insufficient stream. Failed to read a byte", self._position)
            self._peeked = data[0]
        return self._peeked

    def read_byte(self) -> int:
        if self._peeked is not None:
            byte = self._peeked
            self._peeked = None
        else:
            data = self._stream.read(1)
            if not data:
                raise TruncatedStreamError("Insufficient stream. Failed to read a byte", self._position)
            byte = data[0]
        self._position += 1
        self.chunk_consumed += 1
        return byte

    def read_exact(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("Size must be non-negative.")
        if size == 0:
            return b""
        buffer = bytearray()
        if self._peeked is not None:
            buffer.append(self._peeked)
            self._peeked = None
        while len(buffer) < size:
            chunk = self._stream.read(size - len(buffer))
            if not chunk:
                break
            buffer.extend(chunk)
        self._position += len(buffer)
        self.chunk_consumed += len(buffer)
        if len(buffer) < size:
            raise TruncatedStreamError(
                f"The stream is insufficient to read {size} bytes specified in the SMF message. "
                f"Only {len(buffer)} bytes read",
                self._position,
            )
        return bytes(buffer)

    def read_uint16(self) -> int:
        return int.from_bytes(self.read_exact(2), "big", signed=False)

    def read_uint32(self) -> int:
        return int.from_bytes(self.read_exact(4), "big", signed=False)

    def read_varlen(self) -> int:
        try:
            return varlen.decode(self.read_byte)
        except MalformedLengthError as exc:
            raise MalformedLengthError(exc.detail, self._position) from None


__all__ = ["SmfByteSource"]
