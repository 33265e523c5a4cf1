# notes/model.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

Part = Tuple[int, int]  # (track, channel)

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def pitch_name(pitch: int) -> str:
    """MIDI note number -> scientific pitch name (60 = C4)."""
    return f"{NOTE_NAMES[pitch % 12]}{pitch // 12 - 1}"


class RollError(Exception):
    """Base class for fatal pipeline errors."""


class ParseError(RollError):
    """Unreadable source file or malformed command-line syntax."""


class SelectionError(RollError):
    """A selection names a (track, channel) that carries no notes."""


class Action(Enum):
    PRESS = "press"
    RELEASE = "release"


@dataclass(frozen=True)
class NoteEvent:
    source: Part
    pitch: int      # MIDI note number, after transposition
    action: Action
    tick: int       # absolute
    velocity: int = 64

    @property
    def track(self) -> int:
        return self.source[0]

    @property
    def channel(self) -> int:
        return self.source[1]

    def shifted(self, offset: int) -> "NoteEvent":
        return NoteEvent(self.source, self.pitch + offset, self.action, self.tick, self.velocity)


@dataclass(frozen=True)
class Owner:
    source: Part
    tick: int


class ConflictKind(Enum):
    ALREADY_PRESSED = "already_pressed"
    NOT_PRESSED = "not_pressed"


@dataclass(frozen=True)
class Conflict:
    kind: ConflictKind
    pitch: int
    tick: int
    source: Part
    owner: Optional[Owner] = None   # holder at the time, for ALREADY_PRESSED


@dataclass(frozen=True)
class RangeError:
    pitch: int
    tick: int
    source: Part


@dataclass(frozen=True)
class LengthWarning:
    length: float
    limit: float


@dataclass(frozen=True)
class RollSegment:
    pitch: int
    row: int          # 0 = lowest playable pitch
    start_tick: int
    end_tick: int
    column: float     # horizontal offset, inches
    y_start: float    # vertical offset, inches, after compression
    y_end: float

    @property
    def length(self) -> float:
        return self.y_end - self.y_start


@dataclass
class TrackInfo:
    track: int
    name: Optional[str] = None
    instrument: Optional[str] = None


@dataclass
class PartInfo:
    track: int
    channel: int
    bank: Optional[int] = None
    program: Optional[int] = None
    notes: int = 0


@dataclass
class SongInfo:
    ticks_per_beat: int
    tempo: Optional[int] = None     # microseconds per beat
    format: int = 1
    tracks: Dict[int, TrackInfo] = field(default_factory=dict)
    parts: Dict[Part, PartInfo] = field(default_factory=dict)

    @property
    def bpm(self) -> Optional[float]:
        return 60_000_000 / self.tempo if self.tempo else None

    def instrument_name(self, part: Part) -> str:
        info = self.tracks.get(part[0])
        if info is not None and info.instrument:
            return info.instrument
        if info is not None and info.name:
            return info.name
        p = self.parts.get(part)
        if p is not None and p.program is not None:
            return f"program {p.program}"
        return "unknown"
