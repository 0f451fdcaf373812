"""Flatten multi-track sequences into a single format 0 track."""
from __future__ import annotations

import logging
from typing import List, Tuple

from .constants import MidiEventType, MidiMetaType
from .models import MidiEvent, MidiMessage, MidiMusic, MidiTrack

logger = logging.getLogger(__name__)


def _is_end_of_track(event: MidiEvent) -> bool:
    return event.status_byte == MidiEventType.META and event.meta_type == MidiMetaType.END_OF_TRACK


class SmfTrackMerger:
    """Merge every track of a sequence into one, ordered by absolute tick."""

    def __init__(self, source: MidiMusic):
        self.source = source

    @classmethod
    def merge(cls, source: MidiMusic) -> MidiMusic:
        return cls(source)._merge()

    def _merge(self) -> MidiMusic:
        source = self.source
        if source.format == 0:
            return MidiMusic(
                format=0,
                delta_time_spec=source.delta_time_spec,
                tracks=[MidiTrack(list(track.messages)) for track in source.tracks],
            )

        timed: List[Tuple[int, int, int, MidiEvent]] = []
        last_tick = 0
        for track_index, track in enumerate(source.tracks):
            tick = 0
            for message_index, message in enumerate(track.messages):
                tick += message.delta_time
                if _is_end_of_track(message.event):
                    last_tick = max(last_tick, tick)
                    continue
                timed.append((tick, track_index, message_index, message.event))
                last_tick = max(last_tick, tick)
        timed.sort(key=lambda entry: (entry[0], entry[1], entry[2]))

        merged = MidiTrack()
        previous = 0
        for tick, _, _, event in timed:
            merged.add(MidiMessage(tick - previous, event))
            previous = tick
        merged.add(MidiMessage(last_tick - previous, MidiEvent.meta(MidiMetaType.END_OF_TRACK)))

        logger.debug(
            "Merged %d track(s) into %d messages ending at tick %d",
            len(source.tracks),
            len(merged.messages),
            last_tick,
        )
        return MidiMusic(format=0, delta_time_spec=source.delta_time_spec, tracks=[merged])


__all__ = ["SmfTrackMerger"]
