# timeline/scheduler.py
import heapq
from typing import Iterable, List, Sequence
from notes.model import NoteEvent

def merge_streams(streams: Sequence[Iterable[NoteEvent]]) -> List[NoteEvent]:
    """Merge tick-ordered streams into one tick-ordered sequence.

    Equal ticks keep stream order first, then each stream's own order, so
    the result is reproducible for a given selection order.
    """
    keyed = [
        [(ev.tick, idx, seq, ev) for seq, ev in enumerate(stream)]
        for idx, stream in enumerate(streams)
    ]
    for idx, stream in enumerate(keyed):
        if any(a[0] > b[0] for a, b in zip(stream, stream[1:])):
            # out-of-order input; sort it rather than emit a non-monotonic timeline
            keyed[idx] = sorted(stream)
    return [item[3] for item in heapq.merge(*keyed)]

def is_tick_ordered(events: Sequence[NoteEvent]) -> bool:
    return all(a.tick <= b.tick for a, b in zip(events, events[1:]))
