"""Public facade for the Standard MIDI File codec."""

from .constants import MidiEventType, MidiMetaType, fixed_data_size
from .errors import (
    InvariantViolationError,
    MalformedLengthError,
    MalformedMagicError,
    SizeMismatchError,
    SmfError,
    SmfParserError,
    TruncatedStreamError,
    UnexpectedHeaderSizeError,
)
from .merger import SmfTrackMerger
from .meta_writers import (
    DefaultMetaEventWriter,
    MetaEventWriter,
    TextSplittingMetaEventWriter,
    available_meta_event_writers,
    get_meta_event_writer,
    register_meta_event_writer,
)
from .models import MidiEvent, MidiMessage, MidiMusic, MidiTrack
from .reader import SmfReader, read_smf
from .writer import SmfWriter, music_to_bytes, write_smf

__all__ = [
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
    "available_meta_event_writers",
    "fixed_data_size",
    "get_meta_event_writer",
    "music_to_bytes",
    "read_smf",
    "register_meta_event_writer",
    "write_smf",
]
