# notes/selection.py
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping
from notes.model import NoteEvent, Part, ParseError, SelectionError

_SELECTOR = re.compile(r"^(?P<track>\d+),(?P<channel>\d+)(?P<shift>[+-]\d+)?$")

@dataclass(frozen=True)
class Selection:
    track: int
    channel: int
    shift: int = 0  # semitones

    @property
    def part(self) -> Part:
        return (self.track, self.channel)

def parse_selector(text: str) -> Selection:
    """Parse ``track,channel[+shift|-shift]``, e.g. ``1,0`` or ``2,1-12``."""
    m = _SELECTOR.match(text.strip())
    if m is None:
        raise ParseError(f'malformed track selector "{text}": expected track,channel[+shift|-shift]')
    channel = int(m.group('channel'))
    if channel > 15:
        raise ParseError(f'malformed track selector "{text}": bad channel number {channel}')
    shift = int(m.group('shift') or 0)
    if not -127 <= shift <= 127:
        raise ParseError(f'malformed track selector "{text}": bad offset number {shift}')
    return Selection(int(m.group('track')), channel, shift)

def parse_divisor(text: str) -> float:
    """Parse the ``/N`` compression argument."""
    try:
        value = float(text[1:] if text.startswith('/') else text)
    except ValueError as e:
        raise ParseError(f"time divisor parse error: {text!r}") from e
    if not value > 0 or value == float('inf'):
        raise ParseError(f"time divisor must be a positive number, got {text!r}")
    return value

def select_parts(events: Iterable[NoteEvent], selections: List[Selection],
                 available: Mapping[Part, object]) -> List[List[NoteEvent]]:
    """One transposed event stream per selection, in selection order."""
    for sel in selections:
        if sel.part not in available:
            raise SelectionError(f"no notes on track {sel.track} channel {sel.channel}")

    by_part: Dict[Part, List[NoteEvent]] = {}
    for ev in events:
        by_part.setdefault(ev.source, []).append(ev)

    streams: List[List[NoteEvent]] = []
    for sel in selections:
        src = by_part.get(sel.part, [])
        streams.append([ev.shifted(sel.shift) if sel.shift else ev for ev in src])
    return streams
