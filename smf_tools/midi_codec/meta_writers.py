"""Strategies deciding how meta event payloads are chunked on write.

Every strategy answers two questions about the same event: how many bytes it
would write (:meth:`MetaEventWriter.estimate`, used while computing a track
chunk's length) and the bytes themselves (:meth:`MetaEventWriter.emit`).  Both
must agree exactly or the written chunk length is wrong.
"""
from __future__ import annotations

import logging
from typing import BinaryIO, Dict

from .models import MidiEvent

logger = logging.getLogger(__name__)

_DEFAULT_CHUNK = 0x7F
_SPLIT_CHUNK = 0x77
_SPLIT_THRESHOLD = 0x80
_MARKER_LENGTH = 8


class MetaEventWriter:
    """Base class for meta event chunking strategies."""

    name = "base"

    def estimate(self, event: MidiEvent) -> int:
        raise NotImplementedError

    def emit(self, event: MidiEvent, sink: BinaryIO) -> None:
        raise NotImplementedError

    def __call__(self, size_only: bool, event: MidiEvent, sink: BinaryIO | None) -> int:
        if size_only:
            return self.estimate(event)
        if sink is not None:
            self.emit(event, sink)
        return 0


class DefaultMetaEventWriter(MetaEventWriter):
    """Write ``0xFF type size payload`` groups of at most 127 payload bytes.

    Groups after the first are preceded by a zero delta-time byte.
    """

    name = "default"

    def estimate(self, event: MidiEvent) -> int:
        total = event.extra_data_length
        repeats = total // _DEFAULT_CHUNK
        if repeats == 0:
            return 3 + total
        mod = total % _DEFAULT_CHUNK
        return repeats * (4 + _DEFAULT_CHUNK) - 1 + (4 + mod if mod > 0 else 0)

    def emit(self, event: MidiEvent, sink: BinaryIO) -> None:
        payload = event.payload
        total = len(payload)
        written = 0
        while True:
            size = min(_DEFAULT_CHUNK, total - written)
            group = bytearray()
            if written > 0:
                group.append(0)
            group += bytes([0xFF, event.meta_type, size])
            group += payload[written : written + size]
            sink.write(bytes(group))
            written += size
            if written >= total:
                break


class TextSplittingMetaEventWriter(MetaEventWriter):
    """Split long meta texts into marked chunks of at most 119 payload bytes.

    Each chunk starts with an eight byte ``DM:nnnn:`` marker, counted in the
    chunk's size byte.  Payloads shorter than 128 bytes (such as a master track
    name) go through the default writer unchanged.
    """

    name = "text_splitter"

    def __init__(self, fallback: MetaEventWriter | None = None):
        self.fallback = fallback or DefaultMetaEventWriter()

    def estimate(self, event: MidiEvent) -> int:
        total = event.extra_data_length
        if total < _SPLIT_THRESHOLD:
            return self.fallback.estimate(event)
        repeats = total // _SPLIT_CHUNK
        if repeats == 0:
            return 11 + total
        mod = total % _SPLIT_CHUNK
        return repeats * (12 + _SPLIT_CHUNK) - 1 + (12 + mod if mod > 0 else 0)

    def emit(self, event: MidiEvent, sink: BinaryIO) -> None:
        if event.extra_data_length < _SPLIT_THRESHOLD:
            self.fallback.emit(event, sink)
            return
        payload = event.payload
        total = len(payload)
        written = 0
        index = 0
        while written < total:
            size = min(_SPLIT_CHUNK, total - written)
            group = bytearray()
            if written > 0:
                group.append(0)
            group += bytes([0xFF, event.meta_type, size + _MARKER_LENGTH])
            group += b"DM:%04d:" % (index % 10000)
            group += payload[written : written + size]
            sink.write(bytes(group))
            written += size
            index += 1
        logger.debug("Split meta event 0x%02X into %d marked chunks", event.meta_type, index)


_REGISTRY: Dict[str, MetaEventWriter] = {
    DefaultMetaEventWriter.name: DefaultMetaEventWriter(),
    TextSplittingMetaEventWriter.name: TextSplittingMetaEventWriter(),
}


def register_meta_event_writer(name: str, writer: MetaEventWriter) -> None:
    """Make ``writer`` selectable by ``name`` in settings and facades."""

    key = name.strip().lower()
    if not key:
        raise ValueError("Meta event writer name must not be empty.")
    _REGISTRY[key] = writer


def get_meta_event_writer(name: str) -> MetaEventWriter:
    key = name.strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise ValueError(f"Unsupported meta event writer: {name}") from None


def available_meta_event_writers() -> tuple[str, ...]:
    return tuple(sorted(_REGISTRY))


__all__ = [
    "DefaultMetaEventWriter",
    "MetaEventWriter",
    "TextSplittingMetaEventWriter",
    "available_meta_event_writers",
    "get_meta_event_writer",
    "register_meta_event_writer",
]
