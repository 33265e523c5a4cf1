# render/report.py
from typing import Iterable, List, Optional
from notes.model import (Conflict, ConflictKind, LengthWarning, RangeError,
                         SongInfo, pitch_name)

FORMATS = {0: "single track", 1: "multiple track ({n})", 2: "multiple song ({n})"}

def song_lines(song: SongInfo) -> List[str]:
    fmt = FORMATS.get(song.format, "unknown!").format(n=len(song.tracks))
    lines = [f"MIDI file format: {fmt}",
             f"{song.ticks_per_beat} MIDI ticks per metronome beat"]
    if song.bpm:
        lines.append(f"Tempo: {song.bpm:g} beats per minute")
    for part, info in sorted(song.parts.items()):
        if info.bank is None:
            lines.append(f"ERROR: track {part[0]} channel {part[1]} has no MIDI bank set")
        if info.program is None:
            lines.append(f"ERROR: track {part[0]} channel {part[1]} has no MIDI program set")
    for part, info in sorted(song.parts.items()):
        lines.append(f"track {part[0]}, channel {part[1]}: {song.instrument_name(part)}, "
                     f"{info.notes} notes")
    return lines

def conflict_line(c: Conflict) -> str:
    t, ch = c.source
    name = pitch_name(c.pitch)
    if c.kind is ConflictKind.ALREADY_PRESSED:
        ot, och = c.owner.source
        return (f"ERROR: at {c.tick}, note {name} on track {t} channel {ch} "
                f"already pressed at {c.owner.tick} by {ot},{och}")
    return f"ERROR: at {c.tick} on track {t} channel {ch}, note {name} is not pressed yet"

def range_line(e: RangeError) -> str:
    return (f"ERROR: at {e.tick}, note {pitch_name(e.pitch)} on track {e.source[0]} "
            f"channel {e.source[1]} is outside of piano roll range")

def length_lines(length: float, warning: Optional[LengthWarning]) -> List[str]:
    lines = [f"Roll length: {length:.2f} in"]
    if warning is not None:
        lines.append(f"WARNING: roll length {warning.length:.2f} in exceeds "
                     f"the {warning.limit:g} in page limit")
    return lines

def print_lines(lines: Iterable[str]):
    for line in lines:
        print(line)
