"""Coverage for variable-length quantity encoding."""
from __future__ import annotations

import pytest

from smf_tools.midi_codec import varlen
from smf_tools.midi_codec.errors import MalformedLengthError, TruncatedStreamError


@pytest.mark.parametrize(
    ("value", "encoded"),
    [
        (0x00, b"\x00"),
        (0x40, b"\x40"),
        (0x7F, b"\x7f"),
        (0x80, b"\x81\x00"),
        (0x2000, b"\xc0\x00"),
        (0x3FFF, b"\xff\x7f"),
        (0x4000, b"\x81\x80\x00"),
        (0x1FFFFF, b"\xff\xff\x7f"),
        (0x200000, b"\x81\x80\x80\x00"),
        (0x0FFFFFFF, b"\xff\xff\xff\x7f"),
    ],
)
def test_encode_matches_reference_table(value: int, encoded: bytes) -> None:
    assert varlen.encode(value) == encoded
    assert varlen.length(value) == len(encoded)
    assert varlen.decode_bytes(encoded) == (value, len(encoded))


@pytest.mark.parametrize("value", [0, 1, 127, 128, 16383, 16384, 2097151, 2097152, 0x0FFFFFFF])
def test_length_agrees_with_encode(value: int) -> None:
    assert varlen.length(value) == len(varlen.encode(value))


@pytest.mark.parametrize("value", [-1, 0x10000000])
def test_encode_rejects_out_of_range_values(value: int) -> None:
    with pytest.raises(ValueError):
        varlen.encode(value)
    with pytest.raises(ValueError):
        varlen.length(value)


@pytest.mark.parametrize(
    "data",
    [
        pytest.param(bytes([0xFF, 0xFF, 0xFF, 0xFF]), id="exactly-four"),
        pytest.param(bytes([0xFF, 0xFF, 0xFF, 0xFF, 0x7F]), id="with-terminator"),
        pytest.param(bytes([0x80, 0x80, 0x80, 0x80, 0x00]), id="padded-zero"),
    ],
)
def test_decode_rejects_fifth_continuation_byte(data: bytes) -> None:
    with pytest.raises(MalformedLengthError, match="4-byte") as info:
        varlen.decode_bytes(data)
    assert info.value.offset == 4


def test_decode_pulls_bytes_lazily() -> None:
    pending = iter([0x81, 0x00, 0x55])
    assert varlen.decode(lambda: next(pending)) == 0x80
    assert next(pending) == 0x55


def test_decode_bytes_honours_offset() -> None:
    assert varlen.decode_bytes(b"\x00\x00\x83\x60\x01", offset=2) == (0x1E0, 2)


def test_decode_bytes_reports_truncation() -> None:
    with pytest.raises(TruncatedStreamError) as info:
        varlen.decode_bytes(b"\x81\x80")
    assert info.value.offset == 2
