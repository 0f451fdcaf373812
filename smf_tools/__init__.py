from .midi_codec import (
    DefaultMetaEventWriter,
    InvariantViolationError,
    MalformedLengthError,
    MalformedMagicError,
    MetaEventWriter,
    MidiEvent,
    MidiEventType,
    MidiMessage,
    MidiMetaType,
    MidiMusic,
    MidiTrack,
    SizeMismatchError,
    SmfError,
    SmfParserError,
    SmfReader,
    SmfTrackMerger,
    SmfWriter,
    TextSplittingMetaEventWriter,
    TruncatedStreamError,
    UnexpectedHeaderSizeError,
    music_to_bytes,
    read_smf,
    write_smf,
)
from .settings import CodecSettings, apply_logging_settings, load_settings, save_settings

__all__ = [
    "CodecSettings",
    "DefaultMetaEventWriter",
    "InvariantViolationError",
    "MalformedLengthError",
    "MalformedMagicError",
    "MetaEventWriter",
    "MidiEvent",
    "MidiEventType",
    "MidiMessage",
    "MidiMetaType",
    "MidiMusic",
    "MidiTrack",
    "SizeMismatchError",
    "SmfError",
    "SmfParserError",
    "SmfReader",
    "SmfTrackMerger",
    "SmfWriter",
    "TextSplittingMetaEventWriter",
    "TruncatedStreamError",
    "UnexpectedHeaderSizeError",
    "apply_logging_settings",
    "load_settings",
    "music_to_bytes",
    "read_smf",
    "save_settings",
    "write_smf",
]
