"""Parse Standard MIDI Files into :class:`MidiMusic` sequences."""
from __future__ import annotations

import io
import logging
import os
from typing import BinaryIO, Union

from .constants import MidiEventType, fixed_data_size, is_sysex
from .errors import MalformedMagicError, SizeMismatchError, SmfParserError, UnexpectedHeaderSizeError
from .models import MidiEvent, MidiMessage, MidiMusic, MidiTrack
from .streams import SmfByteSource

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_HEADER_MAGIC = b"MThd"
_TRACK_MAGIC = b"MTrk"
_HEADER_LENGTH = 6


class SmfReader:
    """Strict SMF parser; any malformed input aborts the whole read."""

    def __init__(self, stream: BinaryIO):
        self.source = SmfByteSource(stream)
        self.music = MidiMusic()
        self.running_status = 0

    @classmethod
    def read_music(cls, stream: BinaryIO) -> MidiMusic:
        reader = cls(stream)
        return reader.read()

    def read(self) -> MidiMusic:
        source = self.source
        self.music = MidiMusic()
        self.running_status = 0
        self._expect_magic(_HEADER_MAGIC)
        header_length = source.read_uint32()
        if header_length != _HEADER_LENGTH:
            raise UnexpectedHeaderSizeError(
                f"Unexpected data size (should be {_HEADER_LENGTH}, got {header_length})", source.tell()
            )
        self.music.format = source.read_uint16() & 0xFF
        track_count = source.read_uint16()
        division = source.read_uint16()
        self.music.delta_time_spec = division - 0x10000 if division & 0x8000 else division
        logger.debug(
            "SMF header: format=%d tracks=%d division=%d",
            self.music.format,
            track_count,
            self.music.delta_time_spec,
        )
        for _ in range(track_count):
            self.music.add_track(self.read_track())
        return self.music

    def read_track(self) -> MidiTrack:
        source = self.source
        self._expect_magic(_TRACK_MAGIC)
        track_size = source.read_uint32()
        source.reset_chunk_counter()
        self.running_status = 0
        track = MidiTrack()
        while source.chunk_consumed < track_size:
            delta = source.read_varlen()
            track.add(self.read_message(delta))
        if source.chunk_consumed != track_size:
            raise SizeMismatchError(
                f"Size information mismatch (declared {track_size}, consumed {source.chunk_consumed})",
                source.tell(),
            )
        logger.debug("Read track with %d messages (%d bytes)", len(track.messages), track_size)
        return track

    def read_message(self, delta_time: int) -> MidiMessage:
        source = self.source
        if source.peek_byte() >= 0x80:
            self.running_status = source.read_byte()
        elif self.running_status == 0:
            raise SmfParserError("Running status encountered before any status byte", source.tell())
        status = self.running_status

        if status == MidiEventType.META:
            meta_type = source.read_byte()
            length = source.read_varlen()
            payload = source.read_exact(length)
            return MidiMessage(delta_time, MidiEvent.meta(meta_type, payload))

        if is_sysex(status):
            length = source.read_varlen()
            payload = source.read_exact(length)
            return MidiMessage(delta_time, MidiEvent.sysex(payload, status))

        msb = source.read_byte()
        lsb = source.read_byte() if fixed_data_size(status) == 2 else 0
        return MidiMessage(delta_time, MidiEvent(status_byte=status, msb=msb, lsb=lsb))

    def _expect_magic(self, magic: bytes) -> None:
        found = self.source.read_exact(len(magic))
        if found != magic:
            raise MalformedMagicError(
                f"{magic.decode('ascii')} is expected, found {found!r}", self.source.tell()
            )


def read_smf(source: PathLike | bytes | bytearray | BinaryIO) -> MidiMusic:
    """Read a sequence from a path, an in-memory buffer, or an open stream.

    Paths are opened and closed here; a stream passed in stays open.
    """

    if isinstance(source, (bytes, bytearray, memoryview)):
        return SmfReader.read_music(io.BytesIO(bytes(source)))
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as handle:
            music = SmfReader.read_music(handle)
        logger.info("Read %d track(s) from %s", len(music.tracks), source)
        return music
    return SmfReader.read_music(source)


__all__ = ["SmfReader", "read_smf"]
