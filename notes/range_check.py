# notes/range_check.py
from typing import Iterable, List, Tuple
from notes.model import NoteEvent, RangeError

LOWEST_PITCH = 24   # C1
HIGHEST_PITCH = 103  # G7

def in_range(pitch: int, lowest: int = LOWEST_PITCH, highest: int = HIGHEST_PITCH) -> bool:
    return lowest <= pitch <= highest

def validate_range(timeline: Iterable[NoteEvent], lowest: int = LOWEST_PITCH,
                   highest: int = HIGHEST_PITCH) -> Tuple[Tuple[NoteEvent, ...], List[RangeError]]:
    """Split the merged timeline into playable events and range errors."""
    kept: List[NoteEvent] = []
    errors: List[RangeError] = []
    for ev in timeline:
        if in_range(ev.pitch, lowest, highest):
            kept.append(ev)
        else:
            errors.append(RangeError(ev.pitch, ev.tick, ev.source))
    return tuple(kept), errors
