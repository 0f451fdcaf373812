"""Bookkeeping of the reader's byte source."""
from __future__ import annotations

import io

import pytest

from smf_tools.midi_codec.errors import MalformedLengthError, TruncatedStreamError
from smf_tools.midi_codec.streams import SmfByteSource


def test_peek_does_not_consume() -> None:
    source = SmfByteSource(io.BytesIO(b"\x90\x3c"))

    assert source.peek_byte() == 0x90
    assert source.peek_byte() == 0x90
    assert source.tell() == 0
    assert source.chunk_consumed == 0

    assert source.read_byte() == 0x90
    assert source.tell() == 1
    assert source.chunk_consumed == 1


def test_read_exact_includes_peeked_byte_once() -> None:
    source = SmfByteSource(io.BytesIO(b"abcdef"))
    source.peek_byte()

    assert source.read_exact(3) == b"abc"
    assert source.tell() == 3
    assert source.chunk_consumed == 3
    assert source.read_byte() == ord("d")


def test_chunk_counter_resets_independently_of_position() -> None:
    source = SmfByteSource(io.BytesIO(b"\x00\x00\x00\x06\x01"))

    assert source.read_uint32() == 6
    source.reset_chunk_counter()
    source.read_byte()

    assert source.tell() == 5
    assert source.chunk_consumed == 1


def test_short_stream_reads_are_reported() -> None:
    source = SmfByteSource(io.BytesIO(b"\x00"))

    with pytest.raises(TruncatedStreamError, match="Only 1 bytes read") as info:
        source.read_uint16()
    assert info.value.offset == 1

    with pytest.raises(TruncatedStreamError):
        source.peek_byte()


def test_read_varlen_reports_position_of_overflow() -> None:
    source = SmfByteSource(io.BytesIO(b"\x00\x81\x82\x83\x84\x05"))
    source.read_byte()

    with pytest.raises(MalformedLengthError) as info:
        source.read_varlen()
    assert info.value.offset == 5


class _TrickleStream(io.RawIOBase):
    """Stream returning at most one byte per read call."""

    def __init__(self, data: bytes):
        self._data = data
        self._position = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if self._position >= len(self._data):
            return b""
        chunk = self._data[self._position : self._position + 1]
        self._position += 1
        return chunk


def test_read_exact_tolerates_short_reads() -> None:
    source = SmfByteSource(_TrickleStream(b"MThd"))

    assert source.read_exact(4) == b"MThd"
