# ========================= notes/reduction.py =========================
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from config import MergeConfig
from notes.model import Action, Conflict, ConflictKind, NoteEvent, Owner
from timeline.scheduler import merge_streams

@dataclass(frozen=True)
class MergeResult:
    timeline: Tuple[NoteEvent, ...]
    conflicts: Tuple[Conflict, ...]

class SingleOwnerReduction:
    """Fold a tick-ordered event sequence down to one holder per pitch.

    A pitch that is already held keeps its owner: later presses are dropped,
    and reported as ALREADY_PRESSED only when they land more than
    ``fudge_ticks`` after the owner's press. Each dropped press absorbs one
    later release of that pitch which would otherwise find the key unheld.
    Releases clear the owner whichever part sends them.
    """
    def __init__(self, fudge_ticks: int):
        self.fudge_ticks = fudge_ticks

    def apply(self, events: Iterable[NoteEvent]) -> MergeResult:
        owners: Dict[int, Owner] = {}
        surplus: Dict[int, int] = {}
        timeline: List[NoteEvent] = []
        conflicts: List[Conflict] = []

        for ev in events:
            owner = owners.get(ev.pitch)
            if ev.action is Action.PRESS:
                if owner is None:
                    owners[ev.pitch] = Owner(ev.source, ev.tick)
                    timeline.append(ev)
                    continue
                if owner.source != ev.source and ev.tick - owner.tick > self.fudge_ticks:
                    conflicts.append(Conflict(ConflictKind.ALREADY_PRESSED, ev.pitch, ev.tick, ev.source, owner))
                surplus[ev.pitch] = surplus.get(ev.pitch, 0) + 1
            elif owner is not None:
                del owners[ev.pitch]
                timeline.append(ev)
            elif surplus.get(ev.pitch, 0) > 0:
                surplus[ev.pitch] -= 1
            else:
                conflicts.append(Conflict(ConflictKind.NOT_PRESSED, ev.pitch, ev.tick, ev.source))

        if owners:
            logging.debug("%d pitches still held at end of timeline", len(owners))
        return MergeResult(tuple(timeline), tuple(conflicts))

def reduce_streams(streams: Sequence[Iterable[NoteEvent]], ticks_per_beat: int,
                   cfg: Optional[MergeConfig] = None) -> MergeResult:
    """Merge per-part streams and reduce them to a single-owner timeline."""
    cfg = cfg or MergeConfig()
    fudge = cfg.fudge_window(ticks_per_beat)
    merged = merge_streams(streams)
    result = SingleOwnerReduction(fudge).apply(merged)
    logging.info("merged %d events from %d parts: %d accepted, %d conflicts (fudge %d ticks)",
                 len(merged), len(streams), len(result.timeline), len(result.conflicts), fudge)
    return result
