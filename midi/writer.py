# midi/writer.py
import logging
import mido
from typing import Iterable, Optional
from config import OutputConfig
from notes.model import Action, NoteEvent

def timeline_to_midi(timeline: Iterable[NoteEvent], ticks_per_beat: int, tempo: int,
                     cfg: Optional[OutputConfig] = None) -> mido.MidiFile:
    """Build a type-1 file: a tempo track and one piano track with the timeline."""
    cfg = cfg or OutputConfig()
    mid = mido.MidiFile(type=1, ticks_per_beat=ticks_per_beat)

    tempo_track = mido.MidiTrack()
    tempo_track.append(mido.MetaMessage('set_tempo', tempo=tempo, time=0))
    tempo_track.append(mido.MetaMessage('end_of_track', time=0))
    mid.tracks.append(tempo_track)

    piano = mido.MidiTrack()
    piano.append(mido.Message('control_change', channel=cfg.channel, control=0, value=0, time=0))
    piano.append(mido.Message('program_change', channel=cfg.channel, program=cfg.program, time=0))
    last_tick = 0
    for ev in sorted(timeline, key=lambda e: e.tick):
        kind = 'note_on' if ev.action is Action.PRESS else 'note_off'
        piano.append(mido.Message(kind, channel=cfg.channel, note=ev.pitch,
                                  velocity=cfg.velocity, time=ev.tick - last_tick))
        last_tick = ev.tick
    piano.append(mido.MetaMessage('end_of_track', time=0))
    mid.tracks.append(piano)
    return mid

def write_timeline(path: str, timeline: Iterable[NoteEvent], ticks_per_beat: int, tempo: int,
                   cfg: Optional[OutputConfig] = None) -> None:
    mid = timeline_to_midi(timeline, ticks_per_beat, tempo, cfg)
    mid.save(path)
    logging.info("wrote %d note events to %s", len(mid.tracks[1]) - 3, path)
