# render/geometry.py
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from config import RollConfig
from notes.model import Action, LengthWarning, NoteEvent, RollSegment

@dataclass(frozen=True)
class RollLayout:
    segments: Tuple[RollSegment, ...]
    length: float       # inches, after compression
    width: float        # inches, lowest to highest column
    per_beat: float     # inches per beat before compression
    warning: Optional[LengthWarning] = None

def length_per_tick(tempo: int, ticks_per_beat: int, feed_rate: float) -> float:
    """Paper length for one tick, before compression.

    ``tempo`` is microseconds per beat, ``feed_rate`` inches per second.
    """
    return tempo / 1_000_000 / ticks_per_beat * feed_rate

class RollGeometry:
    """Map a validated single-owner timeline onto roll coordinates.

    Columns run left to right from the lowest pitch; time runs down the page.
    """
    def __init__(self, cfg: RollConfig, tempo: int, ticks_per_beat: int):
        if not cfg.divisor > 0:
            raise ValueError(f"compression divisor must be positive, got {cfg.divisor!r}")
        if ticks_per_beat <= 0:
            raise ValueError(f"ticks per beat must be positive, got {ticks_per_beat!r}")
        self.cfg = cfg
        self.tempo = tempo
        self.ticks_per_beat = ticks_per_beat
        self.scale = length_per_tick(tempo, ticks_per_beat, cfg.feed_rate) / cfg.divisor

    def row(self, pitch: int) -> int:
        return pitch - self.cfg.lowest_pitch

    def column(self, pitch: int) -> float:
        return self.row(pitch) * self.cfg.column_pitch

    def y(self, tick: int) -> float:
        return tick * self.scale

    def segment(self, pitch: int, start: int, end: int) -> RollSegment:
        return RollSegment(pitch=pitch, row=self.row(pitch), start_tick=start, end_tick=end,
                           column=self.column(pitch), y_start=self.y(start), y_end=self.y(end))

    def layout(self, timeline: Iterable[NoteEvent]) -> RollLayout:
        events = list(timeline)
        pressed: Dict[int, int] = {}
        segments: List[RollSegment] = []
        for ev in events:
            if ev.action is Action.PRESS:
                pressed.setdefault(ev.pitch, ev.tick)
            elif ev.pitch in pressed:
                segments.append(self.segment(ev.pitch, pressed.pop(ev.pitch), ev.tick))

        if pressed:
            # notes never released run to the end of the performance
            last_tick = max(ev.tick for ev in events)
            logging.warning("%d notes never released; closing them at tick %d", len(pressed), last_tick)
            for pitch, start in pressed.items():
                segments.append(self.segment(pitch, start, last_tick))

        segments.sort(key=lambda s: (s.start_tick, s.pitch, s.end_tick))
        length = max((s.y_end for s in segments), default=0.0)
        warning = None
        if length > self.cfg.length_limit:
            warning = LengthWarning(length, self.cfg.length_limit)
            logging.warning("roll length %.2f in exceeds the %g in page limit", length, self.cfg.length_limit)

        per_beat = length_per_tick(self.tempo, self.ticks_per_beat, self.cfg.feed_rate) * self.ticks_per_beat
        width = (self.cfg.rows - 1) * self.cfg.column_pitch
        return RollLayout(tuple(segments), length, width, per_beat, warning)

def layout_roll(timeline: Iterable[NoteEvent], tempo: int, ticks_per_beat: int,
                cfg: Optional[RollConfig] = None) -> RollLayout:
    return RollGeometry(cfg or RollConfig(), tempo, ticks_per_beat).layout(timeline)
