from __future__ import annotations

import struct

from smf_tools.midi_codec import MidiEvent, MidiMessage, MidiMetaType, MidiMusic, MidiTrack


def vlq(value: int) -> bytes:
    buffer = [value & 0x7F]
    value >>= 7
    while value:
        buffer.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(buffer))


def header_chunk(format_type: int = 1, tracks: int = 1, division: int = 96) -> bytes:
    return b"MThd" + struct.pack(">IHHH", 6, format_type, tracks, division)


def track_chunk(body: bytes, declared: int | None = None) -> bytes:
    length = len(body) if declared is None else declared
    return b"MTrk" + struct.pack(">I", length) + body


def note_on(delta: int, note: int, velocity: int = 0x64, channel: int = 0) -> MidiMessage:
    return MidiMessage(delta, MidiEvent(status_byte=0x90 | channel, msb=note, lsb=velocity))


def note_off(delta: int, note: int, channel: int = 0) -> MidiMessage:
    return MidiMessage(delta, MidiEvent(status_byte=0x80 | channel, msb=note, lsb=0x40))


def end_of_track(delta: int = 0) -> MidiMessage:
    return MidiMessage(delta, MidiEvent.meta(MidiMetaType.END_OF_TRACK))


def make_sample_music() -> MidiMusic:
    """Two-track sequence exercising meta, sysex, and channel messages."""

    conductor = MidiTrack(
        [
            MidiMessage(0, MidiEvent.meta(MidiMetaType.TRACK_NAME, b"Conductor")),
            MidiMessage(0, MidiEvent.meta(MidiMetaType.TEMPO, bytes([0x07, 0xA1, 0x20]))),
            MidiMessage(0, MidiEvent.meta(MidiMetaType.TIME_SIGNATURE, bytes([4, 2, 24, 8]))),
            end_of_track(384),
        ]
    )
    piano = MidiTrack(
        [
            MidiMessage(0, MidiEvent.sysex(bytes([0x7E, 0x7F, 0x09, 0x01, 0xF7]))),
            MidiMessage(0, MidiEvent(status_byte=0xC0, msb=0x05)),
            MidiMessage(0, MidiEvent(status_byte=0xB0, msb=0x07, lsb=0x64)),
            note_on(0, 60),
            note_on(0, 64),
            note_off(96, 60),
            note_off(0, 64),
            MidiMessage(0, MidiEvent(status_byte=0xE0, msb=0x00, lsb=0x40)),
            MidiMessage(0, MidiEvent(status_byte=0xD0, msb=0x30)),
            note_on(200, 67),
            note_off(88, 67),
            end_of_track(),
        ]
    )
    return MidiMusic(format=1, delta_time_spec=96, tracks=[conductor, piano])
