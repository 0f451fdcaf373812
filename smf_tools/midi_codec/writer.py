"""Serialise :class:`MidiMusic` sequences as Standard MIDI Files."""
from __future__ import annotations

import io
import logging
import os
import struct
from typing import TYPE_CHECKING, BinaryIO, Union

from . import varlen
from .constants import MidiEventType, fixed_data_size, is_sysex
from .errors import InvariantViolationError
from .meta_writers import DefaultMetaEventWriter, MetaEventWriter, get_meta_event_writer
from .models import MidiMusic, MidiTrack

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from ..settings import CodecSettings

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


class SmfWriter:
    """Write header and track chunks to a caller-owned binary stream."""

    def __init__(
        self,
        stream: BinaryIO,
        *,
        disable_running_status: bool = False,
        meta_event_writer: MetaEventWriter | None = None,
    ):
        self.stream = stream
        self.disable_running_status = disable_running_status
        self.meta_event_writer = meta_event_writer or DefaultMetaEventWriter()

    def write_music(self, music: MidiMusic) -> None:
        self.write_header(music.format, len(music.tracks), music.delta_time_spec)
        for track in music.tracks:
            self.write_track(track)

    def write_header(self, format_type: int, tracks: int, delta_time_spec: int) -> None:
        self.stream.write(
            b"MThd" + struct.pack(">IHHH", 6, format_type & 0xFFFF, tracks & 0xFFFF, delta_time_spec & 0xFFFF)
        )

    def write_track(self, track: MidiTrack) -> None:
        size = self.compute_track_data_size(track)
        logger.debug("Writing track with %d messages (%d bytes)", len(track.messages), size)
        self.stream.write(b"MTrk" + struct.pack(">I", size))
        self._write_track_body(track, self.stream)

    def compute_track_data_size(self, track: MidiTrack) -> int:
        """Return the body length :meth:`write_track` will emit, writing nothing."""

        return self._write_track_body(track, None)

    def _write_track_body(self, track: MidiTrack, sink: BinaryIO | None) -> int:
        # A ``None`` sink is the dry run used to compute the chunk length.
        size = 0
        running_status = 0
        for message in track.messages:
            event = message.event
            status = event.status_byte
            chunk = bytearray(varlen.encode(message.delta_time))

            if status == MidiEventType.META:
                size += len(chunk) + self.meta_event_writer.estimate(event)
                if sink is not None:
                    sink.write(bytes(chunk))
                    self.meta_event_writer.emit(event, sink)
                running_status = status
                continue

            if is_sysex(status):
                chunk.append(status)
                chunk += varlen.encode(event.extra_data_length)
                chunk += event.payload
            else:
                if self.disable_running_status or status != running_status:
                    chunk.append(status)
                data_length = fixed_data_size(status)
                if data_length > 2:
                    raise InvariantViolationError(f"Unexpected data size: {data_length}")
                chunk.append(event.msb)
                if data_length > 1:
                    chunk.append(event.lsb)

            if sink is not None:
                sink.write(bytes(chunk))
            size += len(chunk)
            running_status = status
        return size


def _resolve_options(
    settings: "CodecSettings | None",
    disable_running_status: bool | None,
    meta_event_writer: MetaEventWriter | str | None,
) -> tuple[bool, MetaEventWriter]:
    if settings is not None:
        if disable_running_status is None:
            disable_running_status = settings.disable_running_status
        if meta_event_writer is None:
            meta_event_writer = settings.meta_event_writer
    if isinstance(meta_event_writer, str):
        meta_event_writer = get_meta_event_writer(meta_event_writer)
    return bool(disable_running_status), meta_event_writer or DefaultMetaEventWriter()


def write_smf(
    music: MidiMusic,
    target: PathLike | BinaryIO,
    *,
    settings: "CodecSettings | None" = None,
    disable_running_status: bool | None = None,
    meta_event_writer: MetaEventWriter | str | None = None,
) -> None:
    """Write ``music`` to a path or an open binary stream.

    Paths are opened and closed here; a stream passed in stays open.
    Explicit keyword arguments take precedence over ``settings``.
    """

    running, meta_writer = _resolve_options(settings, disable_running_status, meta_event_writer)
    if isinstance(target, (str, os.PathLike)):
        with open(target, "wb") as handle:
            SmfWriter(handle, disable_running_status=running, meta_event_writer=meta_writer).write_music(music)
        logger.info("Wrote %d track(s) to %s", len(music.tracks), target)
        return
    SmfWriter(target, disable_running_status=running, meta_event_writer=meta_writer).write_music(music)


def music_to_bytes(
    music: MidiMusic,
    *,
    settings: "CodecSettings | None" = None,
    disable_running_status: bool | None = None,
    meta_event_writer: MetaEventWriter | str | None = None,
) -> bytes:
    buffer = io.BytesIO()
    write_smf(
        music,
        buffer,
        settings=settings,
        disable_running_status=disable_running_status,
        meta_event_writer=meta_event_writer,
    )
    return buffer.getvalue()


__all__ = ["SmfWriter", "music_to_bytes", "write_smf"]
