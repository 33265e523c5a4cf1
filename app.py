# app.py
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from config import AppConfig
from midi.parser import parse_midi_to_events
from midi.writer import write_timeline
from notes.model import Conflict, NoteEvent, RangeError, SongInfo
from notes.range_check import validate_range
from notes.reduction import reduce_streams
from notes.selection import Selection, select_parts
from render.geometry import RollLayout, layout_roll
from render.renderer import PageRenderer
from render import report

@dataclass
class RunResult:
    song: SongInfo
    timeline: Tuple[NoteEvent, ...]
    conflicts: Tuple[Conflict, ...]
    range_errors: List[RangeError]
    layout: RollLayout
    lines: List[str] = field(default_factory=list)

class App:
    """Source file -> selected parts -> single-owner timeline -> page + MIDI."""
    def __init__(self, cfg: AppConfig, echo: bool = True):
        self.cfg = cfg
        self.echo = echo
        self.lines: List[str] = []

    def _say(self, lines):
        lines = list(lines)
        self.lines.extend(lines)
        if self.echo:
            report.print_lines(lines)

    def process(self, path: str, selections: List[Selection]) -> RunResult:
        """Everything except writing artifacts; fatal errors raise before any output."""
        self.lines = []
        events, song = parse_midi_to_events(path)
        self._say(report.song_lines(song))

        available = {part: info for part, info in song.parts.items() if info.notes}
        streams = select_parts(events, selections, available)

        merged = reduce_streams(streams, song.ticks_per_beat, self.cfg.merge)
        self._say(report.conflict_line(c) for c in merged.conflicts)

        timeline, range_errors = validate_range(merged.timeline, self.cfg.roll.lowest_pitch,
                                                self.cfg.roll.highest_pitch)
        self._say(report.range_line(e) for e in range_errors)

        layout = layout_roll(timeline, song.tempo, song.ticks_per_beat, self.cfg.roll)
        self._say(report.length_lines(layout.length, layout.warning))

        return RunResult(song, timeline, merged.conflicts, range_errors, layout, list(self.lines))

    def run(self, path: str, selections: List[Selection], page_out: Optional[str] = None,
            midi_out: Optional[str] = None) -> RunResult:
        page_out = page_out or default_page_path(path)
        midi_out = midi_out or default_midi_path(path)
        logging.info("processing %s with %d selections", path, len(selections))

        result = self.process(path, selections)

        caption = f"{os.path.basename(path)}  {result.layout.length:.2f} in  /{self.cfg.roll.divisor:g}"
        PageRenderer(self.cfg.page, self.cfg.roll).save(result.layout, page_out, caption)
        write_timeline(midi_out, result.timeline, result.song.ticks_per_beat, result.song.tempo,
                       self.cfg.output)
        return result

def default_page_path(path: str) -> str:
    return os.path.splitext(path)[0] + ".png"

def default_midi_path(path: str) -> str:
    return os.path.splitext(path)[0] + ".roll.mid"
