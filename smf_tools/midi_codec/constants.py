"""Status byte and meta type constants for Standard MIDI Files."""
from __future__ import annotations


class MidiEventType:
    """Status bytes (upper nibble for channel messages, whole byte otherwise)."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    PAF = 0xA0  # polyphonic key pressure
    CC = 0xB0
    PROGRAM = 0xC0
    CAF = 0xD0  # channel pressure
    PITCH = 0xE0
    SYSEX = 0xF0
    MTC_QUARTER_FRAME = 0xF1
    SONG_POSITION = 0xF2
    SONG_SELECT = 0xF3
    TUNE_REQUEST = 0xF6
    SYSEX_END = 0xF7
    MIDI_CLOCK = 0xF8
    MIDI_TICK = 0xF9
    MIDI_START = 0xFA
    MIDI_CONTINUE = 0xFB
    MIDI_STOP = 0xFC
    ACTIVE_SENSE = 0xFE
    RESET = 0xFF
    META = 0xFF


class MidiMetaType:
    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE = 0x07
    CHANNEL_PREFIX = 0x20
    PORT = 0x21
    END_OF_TRACK = 0x2F
    TEMPO = 0x51
    SMTPE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


_TWO_BYTE_TYPES = frozenset(
    {
        MidiEventType.NOTE_OFF,
        MidiEventType.NOTE_ON,
        MidiEventType.PAF,
        MidiEventType.CC,
        MidiEventType.PITCH,
    }
)
_ONE_BYTE_TYPES = frozenset(
    {
        MidiEventType.PROGRAM,
        MidiEventType.CAF,
    }
)


def event_type_of(status_byte: int) -> int:
    """Return the event class of ``status_byte`` (channel nibble stripped)."""

    if status_byte < 0xF0:
        return status_byte & 0xF0
    return status_byte


def fixed_data_size(status_byte: int) -> int:
    """Number of data bytes that follow a non-meta, non-sysex status byte."""

    event_type = event_type_of(status_byte)
    if event_type in _TWO_BYTE_TYPES:
        return 2
    if event_type in _ONE_BYTE_TYPES:
        return 1
    return 0


def is_sysex(status_byte: int) -> bool:
    return status_byte in (MidiEventType.SYSEX, MidiEventType.SYSEX_END)


def has_extra_data(status_byte: int) -> bool:
    """True for status bytes whose payload lives in ``extra_data``."""

    return status_byte == MidiEventType.META or is_sysex(status_byte)


__all__ = [
    "MidiEventType",
    "MidiMetaType",
    "event_type_of",
    "fixed_data_size",
    "has_extra_data",
    "is_sysex",
]
