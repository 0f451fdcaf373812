"""In-memory representation of MIDI events, tracks, and sequences."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .constants import MidiEventType, event_type_of, has_extra_data
from .varlen import MAX_VARLEN_VALUE


def _check_byte(name: str, value: int, upper: int = 0xFF) -> None:
    if not 0 <= value <= upper:
        raise ValueError(f"{name} out of range: {value}")


@dataclass(frozen=True)
class MidiEvent:
    """A single MIDI message without timing information.

    Fixed-size channel messages keep their data in ``msb``/``lsb``.  Meta and
    system exclusive messages keep their payload in ``extra_data``; only the
    slice ``extra_data[extra_data_offset:extra_data_offset + extra_data_length]``
    belongs to the event.
    """

    status_byte: int
    msb: int = 0
    lsb: int = 0
    meta_type: int = 0
    extra_data: bytes | None = None
    extra_data_offset: int = 0
    extra_data_length: int = -1

    def __post_init__(self) -> None:
        _check_byte("Status byte", self.status_byte)
        if self.status_byte < 0x80:
            raise ValueError(f"Status byte must have its high bit set: 0x{self.status_byte:02X}")
        _check_byte("Data byte", self.msb)
        _check_byte("Data byte", self.lsb)
        _check_byte("Meta type", self.meta_type)

        if not has_extra_data(self.status_byte):
            if self.extra_data is not None:
                raise ValueError(f"Fixed-size event 0x{self.status_byte:02X} cannot carry extra data")
            object.__setattr__(self, "extra_data_length", 0)
            return

        if self.extra_data is None:
            raise ValueError(f"Event 0x{self.status_byte:02X} requires extra data")
        data = bytes(self.extra_data)
        object.__setattr__(self, "extra_data", data)
        if self.extra_data_length < 0:
            object.__setattr__(self, "extra_data_length", len(data) - self.extra_data_offset)
        if self.extra_data_offset < 0 or self.extra_data_offset + self.extra_data_length > len(data):
            raise ValueError("Extra data range lies outside the supplied buffer")
        if self.extra_data_length > MAX_VARLEN_VALUE:
            raise ValueError("Extra data is too long for a variable-length size field")

    @classmethod
    def from_value(cls, value: int) -> "MidiEvent":
        """Build a fixed-size event from a ``status | msb << 8 | lsb << 16`` word."""

        return cls(
            status_byte=value & 0xFF,
            msb=(value >> 8) & 0xFF,
            lsb=(value >> 16) & 0xFF,
        )

    @classmethod
    def meta(cls, meta_type: int, data: bytes = b"") -> "MidiEvent":
        return cls(status_byte=MidiEventType.META, meta_type=meta_type, extra_data=bytes(data))

    @classmethod
    def sysex(cls, data: bytes, status_byte: int = MidiEventType.SYSEX) -> "MidiEvent":
        return cls(status_byte=status_byte, extra_data=bytes(data))

    @property
    def event_type(self) -> int:
        return event_type_of(self.status_byte)

    @property
    def channel(self) -> int:
        return self.status_byte & 0x0F

    @property
    def value(self) -> int:
        return self.status_byte | (self.msb << 8) | (self.lsb << 16)

    @property
    def payload(self) -> bytes:
        if self.extra_data is None:
            return b""
        start = self.extra_data_offset
        return self.extra_data[start : start + self.extra_data_length]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MidiEvent):
            return NotImplemented
        return (
            self.status_byte == other.status_byte
            and self.msb == other.msb
            and self.lsb == other.lsb
            and self.meta_type == other.meta_type
            and self.payload == other.payload
        )

    def __hash__(self) -> int:
        return hash((self.status_byte, self.msb, self.lsb, self.meta_type, self.payload))


@dataclass(frozen=True)
class MidiMessage:
    """A :class:`MidiEvent` preceded by its delta-time in ticks."""

    delta_time: int
    event: MidiEvent

    def __post_init__(self) -> None:
        if not 0 <= self.delta_time <= MAX_VARLEN_VALUE:
            raise ValueError(f"Delta time out of range: {self.delta_time}")


@dataclass
class MidiTrack:
    messages: List[MidiMessage] = field(default_factory=list)

    def add(self, message: MidiMessage) -> None:
        self.messages.append(message)

    @property
    def total_ticks(self) -> int:
        return sum(message.delta_time for message in self.messages)


@dataclass
class MidiMusic:
    """A whole sequence: SMF format, division, and the ordered tracks.

    ``delta_time_spec`` is stored as a signed 16-bit value and passed through
    untouched; negative values hold the SMPTE division form.
    """

    format: int = 1
    delta_time_spec: int = 0
    tracks: List[MidiTrack] = field(default_factory=list)

    def add_track(self, track: MidiTrack) -> None:
        self.tracks.append(track)


__all__ = ["MidiEvent", "MidiMessage", "MidiMusic", "MidiTrack"]
